"""Shared helpers used by the pipelines and the CLI layer."""

from .errors import BuildToolsError, ConfigurationError, ManifestError, ToolError
from .process import run_cmd

__all__ = [
    "BuildToolsError",
    "ConfigurationError",
    "ManifestError",
    "ToolError",
    "run_cmd",
]
