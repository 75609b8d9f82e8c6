"""Base classes for external command-line tools."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from ..utils import process

Runner = Callable[..., subprocess.CompletedProcess]


@dataclass
class ToolSpec:
    """Specification returned by :meth:`Tool.build_spec`.

    Attributes mirror the arguments of :func:`~prestashop_build_tools.utils.process.run_cmd`.
    """

    args: Sequence[str]
    cwd: Path | None = None
    env: dict[str, str] | None = field(default=None)


class Tool:
    """Base class for wrappers around external utilities."""

    def execute(self, runner: Runner | None = None) -> subprocess.CompletedProcess:
        """Build a :class:`ToolSpec` and run it.

        Args:
            runner: Callable with the signature of :func:`run_cmd`. Defaults
                to the module-level runner so tests can monkeypatch it.
        """
        spec = self.build_spec()
        run = runner or process.run_cmd
        return run(spec.args, cwd=spec.cwd, env=spec.env)

    def build_spec(self) -> ToolSpec:
        """Return a :class:`ToolSpec` describing how to run this tool."""
        raise NotImplementedError
