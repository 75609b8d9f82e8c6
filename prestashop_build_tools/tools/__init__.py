"""Wrappers for the external tools driven by the pipelines."""

from .base import Tool, ToolSpec
from .composer import ComposerConfig, ComposerTool
from .rsync import RsyncConfig, RsyncTool
from .scoper import ScoperConfig, ScoperTool

__all__ = [
    "Tool",
    "ToolSpec",
    "ComposerConfig",
    "ComposerTool",
    "RsyncConfig",
    "RsyncTool",
    "ScoperConfig",
    "ScoperTool",
]
