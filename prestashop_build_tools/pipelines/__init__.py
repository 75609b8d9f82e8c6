"""Orchestration of the build, prefix and scaffold commands."""

from .build import build_module
from .prefix import prefix_vendor
from .scaffold import configure_module
from .types import BuildResult, PrefixResult, ScaffoldResult

__all__ = [
    "build_module",
    "prefix_vendor",
    "configure_module",
    "BuildResult",
    "PrefixResult",
    "ScaffoldResult",
]
