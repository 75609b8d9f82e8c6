"""Tool wrapper for ``rsync`` staging copies."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from .base import Tool, ToolSpec


@dataclass
class RsyncConfig:
    """Options for copying a working directory into a staging directory."""

    source: Path
    destination: Path
    exclude_file: Path
    always_exclude: Sequence[str] = field(default_factory=list)
    binary: str = "rsync"


class RsyncTool(Tool):
    """Copy *source* into *destination* honouring an exclusion list.

    Attributes are preserved, directories emptied by the exclusions are
    pruned and zero-byte files are skipped.
    """

    def __init__(self, cfg: RsyncConfig):
        self.cfg = cfg

    def build_spec(self) -> ToolSpec:  # type: ignore[override]
        args = [
            self.cfg.binary,
            "-a",
            f"--exclude-from={self.cfg.exclude_file}",
            *(f"--exclude={pattern}" for pattern in self.cfg.always_exclude),
            "--prune-empty-dirs",
            "--min-size=1",
            "--quiet",
            # Trailing slash copies the *contents* of the source directory.
            f"{self.cfg.source}/",
            str(self.cfg.destination),
        ]
        return ToolSpec(args)
