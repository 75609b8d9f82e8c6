"""
Prefix the namespaces of vendored Composer packages.

PHP-Scoper writes prefixed copies of every package into a separate output
directory. The originals are then removed from ``vendor/`` so Composer never
autoloads two definitions of the same class, and (by default) the prefixed
copies take their place.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import List

import structlog

from ..config.schema import PrefixConfig
from ..tools import ComposerConfig, ComposerTool, ScoperConfig, ScoperTool
from ..tools.base import Runner
from ..utils.errors import BuildToolsError
from ..utils.paths import SCOPER_MARKER_FILE, resource_path
from .types import PrefixResult

log = structlog.get_logger()


def _remove(path: Path) -> None:
    """Delete *path* whether it is a directory, a file or a symlink."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)


def clean_vendor_prefixed_directory(vendor_prefixed_dir: Path) -> None:
    _remove(vendor_prefixed_dir)


def copy_dummy_file(vendor_dir: Path) -> Path:
    """Drop an empty file directly inside *vendor_dir*.

    PHP-Scoper keeps paths relative to the common root of its input files.
    Without a file at the top of ``vendor/`` that root would be a single
    package folder and the ``vendor/package`` layout would be flattened.
    """
    target = vendor_dir / SCOPER_MARKER_FILE
    shutil.copyfile(resource_path(SCOPER_MARKER_FILE), target)
    return target


def find_packages(vendor_prefixed_dir: Path) -> List[Path]:
    """Return ``vendor/package`` paths (relative) found at depth two."""
    if not vendor_prefixed_dir.is_dir():
        return []
    packages: list[Path] = []
    for vendor in sorted(p for p in vendor_prefixed_dir.iterdir() if p.is_dir()):
        for package in sorted(p for p in vendor.iterdir() if p.is_dir()):
            packages.append(package.relative_to(vendor_prefixed_dir))
    return packages


def _swap_in(source: Path, target: Path) -> None:
    """Replace *target* with a copy of *source*.

    The copy lands in a hidden sibling first and is renamed over the
    original only once complete.
    """
    target.parent.mkdir(parents=True, exist_ok=True)
    side = target.with_name(f".{target.name}.pbt-new")
    _remove(side)
    shutil.copytree(source, side, symlinks=True)
    _remove(target)
    os.replace(side, target)


def remove_prefixed_vendor(vendor_dir: Path, packages: List[Path]) -> None:
    """Delete the unprefixed originals of *packages* from *vendor_dir*."""
    for rel in packages:
        _remove(vendor_dir / rel)
        log.info("prefix.removed-original", package=rel.as_posix())


def move_back_prefixed_vendors(
    vendor_dir: Path, vendor_prefixed_dir: Path, packages: List[Path]
) -> None:
    """Swap every prefixed package into *vendor_dir* at the same relative path."""
    for rel in packages:
        _swap_in(vendor_prefixed_dir / rel, vendor_dir / rel)
        log.info("prefix.moved-back", package=rel.as_posix())


def dump_composer_autoload(working_dir: Path, runner: Runner | None = None) -> None:
    ComposerTool(ComposerConfig(working_dir=working_dir)).execute(runner)


def prefix_vendor(cfg: PrefixConfig, *, runner: Runner | None = None) -> PrefixResult:
    """Run PHP-Scoper over ``cfg.vendor_dir`` and swap in the prefixed packages.

    Args:
        cfg: Frozen prefix configuration.
        runner: Optional replacement for
            :func:`~prestashop_build_tools.utils.process.run_cmd`.

    Returns:
        :class:`PrefixResult` listing the processed packages.

    Raises:
        ToolError: When PHP-Scoper or Composer fails.
        BuildToolsError: When PHP-Scoper produced no package directories.
            ``vendor/`` is left untouched in that case.
    """
    log.info("prefix.start", prefix=cfg.prefix, vendor_dir=str(cfg.vendor_dir))

    clean_vendor_prefixed_directory(cfg.vendor_prefixed_dir)
    copy_dummy_file(cfg.vendor_dir)

    ScoperTool(
        ScoperConfig(
            vendor_dir=cfg.vendor_dir,
            output_dir=cfg.vendor_prefixed_dir,
            config_file=cfg.config_file,
            prefix=cfg.prefix,
        )
    ).execute(runner)

    packages = find_packages(cfg.vendor_prefixed_dir)
    if not packages:
        raise BuildToolsError(
            f"PHP-Scoper produced no packages in {cfg.vendor_prefixed_dir}; "
            f"{cfg.vendor_dir} was left untouched"
        )

    if cfg.move_vendor:
        move_back_prefixed_vendors(cfg.vendor_dir, cfg.vendor_prefixed_dir, packages)
    else:
        remove_prefixed_vendor(cfg.vendor_dir, packages)

    dump_composer_autoload(cfg.working_dir, runner)

    log.info("prefix.done", packages=len(packages))
    return PrefixResult(packages=packages, vendor_dir=cfg.vendor_dir, moved=cfg.move_vendor)
