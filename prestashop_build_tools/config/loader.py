"""
Build the frozen pipeline configs from CLI flags and manifest defaults.

Resolution order for each value (first match wins):

1. The explicit command-line flag.
2. ``extra.prestashop-build-tools.<key>`` in ``<working-dir>/composer.json``
   (module name and prefix only).
3. A project-local support file in the working directory, then the
   packaged default (exclusion list, license, PHP-Scoper config).

All resolution logic lives here so pipelines receive validated objects.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import structlog
from pydantic import ValidationError

from ..utils.errors import ConfigurationError
from ..utils.paths import (
    EXCLUDES_FILE,
    LICENSE_FILE,
    SCOPER_CONFIG_FILE,
    resolve_support_file,
)
from .manifest import EXTRA_KEY, Manifest
from .schema import BuildConfig, PrefixConfig

log = structlog.get_logger()

MANIFEST_NAME = "composer.json"


def _from_manifest(working_dir: Path, key: str) -> Optional[str]:
    """Return ``extra.prestashop-build-tools.<key>`` from the manifest."""
    manifest = Manifest(working_dir / MANIFEST_NAME)
    value = manifest.get(f"{EXTRA_KEY}.{key}")
    log.debug("manifest.lookup", key=key, value=value)
    return value


def _require_dir(path: Path, what: str) -> Path:
    path = Path(path).expanduser().resolve()
    if not path.is_dir():
        raise ConfigurationError(f"{what} does not exist: {path}")
    return path


def _validated(model, **kwargs):
    try:
        return model(**kwargs)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration – {exc}") from exc


def load_build_config(
    *,
    working_dir: Path,
    output_dir: Optional[Path] = None,
    module_name: Optional[str] = None,
    exclude_file: Optional[Path] = None,
    license_file: Optional[Path] = None,
    authoritative: bool = False,
) -> BuildConfig:
    """Return the :class:`BuildConfig` for ``build-module``.

    Raises:
        ConfigurationError: When the working directory is missing, the module
            name cannot be resolved, or a support file does not exist.
        ManifestError: When the manifest is needed but cannot be read.
    """
    working_dir = _require_dir(working_dir, "Working directory")
    output_dir = Path(output_dir).expanduser().resolve() if output_dir else working_dir

    if not module_name:
        module_name = _from_manifest(working_dir, "name")
    if not module_name:
        raise ConfigurationError(
            f"No module name given and '{EXTRA_KEY}.name' is not set in "
            f"{working_dir / MANIFEST_NAME}"
        )

    exclude_file = resolve_support_file(exclude_file, working_dir, EXCLUDES_FILE)
    license_file = resolve_support_file(license_file, working_dir, LICENSE_FILE)
    for label, f in (("Exclude file", exclude_file), ("License file", license_file)):
        if not f.is_file():
            raise ConfigurationError(f"{label} does not exist: {f}")

    return _validated(
        BuildConfig,
        working_dir=working_dir,
        output_dir=output_dir,
        module_name=module_name,
        exclude_file=exclude_file,
        license_file=license_file,
        authoritative=authoritative,
    )


def load_prefix_config(
    *,
    working_dir: Path,
    vendor_dir: Optional[Path] = None,
    vendor_prefixed_dir: Optional[Path] = None,
    config_file: Optional[Path] = None,
    prefix: Optional[str] = None,
    move_vendor: bool = True,
) -> PrefixConfig:
    """Return the :class:`PrefixConfig` for ``prefix-vendor``.

    Relative vendor directories are resolved against *working_dir*.

    Raises:
        ConfigurationError: When a directory or the scoper config is missing,
            or no prefix can be resolved.
        ManifestError: When the manifest is needed but cannot be read.
    """
    working_dir = _require_dir(working_dir, "Working directory")
    vendor_dir = _require_dir(working_dir / (vendor_dir or "vendor"), "Vendor directory")
    vendor_prefixed_dir = (working_dir / (vendor_prefixed_dir or "vendor-prefixed")).resolve()
    if vendor_prefixed_dir == vendor_dir:
        raise ConfigurationError("Vendor and prefixed vendor directories must differ")

    if not prefix:
        prefix = _from_manifest(working_dir, "prefix")
    if not prefix:
        raise ConfigurationError(
            f"No prefix given and '{EXTRA_KEY}.prefix' is not set in "
            f"{working_dir / MANIFEST_NAME}"
        )

    config_file = resolve_support_file(config_file, working_dir, SCOPER_CONFIG_FILE)
    if not config_file.is_file():
        raise ConfigurationError(f"PHP-Scoper config does not exist: {config_file}")

    return _validated(
        PrefixConfig,
        working_dir=working_dir,
        vendor_dir=vendor_dir,
        vendor_prefixed_dir=vendor_prefixed_dir,
        config_file=config_file,
        prefix=prefix,
        move_vendor=move_vendor,
    )
