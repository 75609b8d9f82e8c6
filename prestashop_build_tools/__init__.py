"""
prestashop_build_tools package initialisation.

Exposes the version string resolved from the installed distribution metadata
and re-exports the manifest reader for convenience::

    from prestashop_build_tools import Manifest
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version("prestashop-build-tools")
except PackageNotFoundError:
    # Source tree without an installed wheel.
    __version__ = "0.0.0"

from .config import Manifest  # noqa: E402

__all__: list[str] = ["Manifest", "__version__"]
