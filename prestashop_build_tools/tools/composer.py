"""Tool wrapper for the Composer dependency manager."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .base import Tool, ToolSpec

DUMP_AUTOLOAD = "dump-autoload"
UPDATE = "update"


@dataclass
class ComposerConfig:
    """Configuration for one ``composer`` invocation."""

    working_dir: Path
    command: str = DUMP_AUTOLOAD
    classmap_authoritative: bool = False
    binary: str = "composer"


class ComposerTool(Tool):
    """Run ``composer dump-autoload`` or ``composer update``."""

    def __init__(self, cfg: ComposerConfig):
        self.cfg = cfg

    def build_spec(self) -> ToolSpec:  # type: ignore[override]
        if self.cfg.command not in {DUMP_AUTOLOAD, UPDATE}:
            raise ValueError(f"unsupported composer command: {self.cfg.command}")
        args = [self.cfg.binary, self.cfg.command, f"--working-dir={self.cfg.working_dir}"]
        if self.cfg.command == DUMP_AUTOLOAD:
            if self.cfg.classmap_authoritative:
                args.append("--classmap-authoritative")
            args.append("--quiet")
        else:
            args.append("--no-interaction")
        return ToolSpec(args)
