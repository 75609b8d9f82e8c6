"""Tool wrapper for PHP-Scoper's ``add-prefix`` command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .base import Tool, ToolSpec


@dataclass
class ScoperConfig:
    """Configuration for a PHP-Scoper run over the vendor directory."""

    vendor_dir: Path
    output_dir: Path
    config_file: Path
    prefix: str
    binary: str = "php-scoper"


class ScoperTool(Tool):
    """Prefix every namespace found under ``vendor_dir``."""

    def __init__(self, cfg: ScoperConfig):
        self.cfg = cfg

    def build_spec(self) -> ToolSpec:  # type: ignore[override]
        args = [
            self.cfg.binary,
            "add-prefix",
            f"--working-dir={self.cfg.vendor_dir}",
            f"--output-dir={self.cfg.output_dir}",
            f"--config={self.cfg.config_file}",
            f"--prefix={self.cfg.prefix}",
            "--force",
            "--no-interaction",
        ]
        return ToolSpec(args, cwd=self.cfg.vendor_dir)
