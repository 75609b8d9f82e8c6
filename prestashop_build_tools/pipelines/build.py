"""
Create the publishable ``<module>.zip`` for a PrestaShop module.

Pipeline (each step completes before the next starts):

1. Optionally regenerate an authoritative Composer classmap.
2. Recreate ``<working-dir>/.pbt/<module>`` empty.
3. Remove a stale ``<output-dir>/<module>.zip``.
4. ``rsync`` the working directory into the staging directory.
5. Inject ``index.php`` into every staged directory.
6. Rewrite license headers, skipping ``vendor/``.
7. Zip the staged module folder.
8. Move the archive into the output directory.

Every external tool failure raises :class:`ToolError`; nothing is retried.
"""

from __future__ import annotations

import shutil
import zipfile
from pathlib import Path

import structlog

from ..config.schema import BuildConfig
from ..tools import ComposerConfig, ComposerTool, RsyncConfig, RsyncTool
from ..tools.base import Runner
from ..utils.headers import stamp_tree
from ..utils.logging import STAGING_DIRNAME
from ..utils.markers import inject_markers
from ..utils.paths import INDEX_PHP_FILE, is_dangling, resource_path, walk_tree
from .types import BuildResult

log = structlog.get_logger()


def generate_authoritative_classmap(working_dir: Path, runner: Runner | None = None) -> None:
    ComposerTool(
        ComposerConfig(working_dir=working_dir, classmap_authoritative=True)
    ).execute(runner)


def clean_tmp_directory(build_dir: Path) -> None:
    """Remove *build_dir* if present and recreate it empty."""
    if build_dir.exists():
        shutil.rmtree(build_dir)
    build_dir.mkdir(parents=True)


def remove_artifact(output_dir: Path, artifact_name: str) -> bool:
    """Delete ``output_dir/artifact_name``; return whether it existed."""
    artifact = output_dir / artifact_name
    if artifact.exists():
        artifact.unlink()
        log.info("build.removed-stale-artifact", path=str(artifact))
        return True
    return False


def copy_files(
    working_dir: Path,
    build_dir: Path,
    exclude_file: Path,
    runner: Runner | None = None,
) -> None:
    """Mirror *working_dir* into *build_dir* minus excluded paths.

    The staging directory is always excluded, whatever the exclusion list
    says, so the copy never recurses into itself.
    """
    RsyncTool(
        RsyncConfig(
            source=working_dir,
            destination=build_dir,
            exclude_file=exclude_file,
            always_exclude=[f"/{STAGING_DIRNAME}"],
        )
    ).execute(runner)


def generate_artifact(tmp_dir: Path, module_name: str, artifact_name: str) -> Path:
    """Zip ``tmp_dir/module_name`` into ``tmp_dir/artifact_name``.

    Entries are rooted at ``<module_name>/`` as PrestaShop expects, written
    in sorted order, with an explicit entry for every directory. Symlinks
    are archived as the content they point to; broken links are skipped.
    """
    src = tmp_dir / module_name
    archive = tmp_dir / artifact_name
    if archive.exists():
        archive.unlink()

    with zipfile.ZipFile(archive, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.write(src, module_name)
        for dirpath, dirnames, filenames in walk_tree(src):
            rel = Path(module_name) / dirpath.relative_to(src)
            for name in dirnames + filenames:
                path = dirpath / name
                if is_dangling(path):
                    log.warning("build.skip-broken-link", path=str(path))
                    continue
                zf.write(path, (rel / name).as_posix())

    log.info("build.archived", archive=str(archive))
    return archive


def move_artifact(archive: Path, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / archive.name
    shutil.move(str(archive), str(target))
    return target


def build_module(cfg: BuildConfig, *, runner: Runner | None = None) -> BuildResult:
    """Run the whole packaging pipeline described by *cfg*.

    Args:
        cfg: Frozen build configuration.
        runner: Optional replacement for
            :func:`~prestashop_build_tools.utils.process.run_cmd`.

    Returns:
        :class:`BuildResult` pointing at the final archive.

    Raises:
        ToolError: When ``composer`` or ``rsync`` fails.
    """
    log.info("build.start", module=cfg.module_name, working_dir=str(cfg.working_dir))

    if cfg.authoritative:
        generate_authoritative_classmap(cfg.working_dir, runner)

    clean_tmp_directory(cfg.build_dir)
    remove_artifact(cfg.output_dir, cfg.artifact_name)
    copy_files(cfg.working_dir, cfg.build_dir, cfg.exclude_file, runner)

    markers = inject_markers(cfg.build_dir, resource_path(INDEX_PHP_FILE))
    stamped = stamp_tree(cfg.build_dir, cfg.license_file.read_text(encoding="utf-8"))

    archive = generate_artifact(cfg.tmp_dir, cfg.module_name, cfg.artifact_name)
    artifact = move_artifact(archive, cfg.output_dir)

    log.info("build.done", artifact=str(artifact))
    return BuildResult(
        artifact=artifact,
        build_dir=cfg.build_dir,
        marker_files=markers,
        stamped_files=stamped,
    )
