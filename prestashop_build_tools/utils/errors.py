"""Exceptions raised by the build, prefix and scaffold pipelines."""

from __future__ import annotations

from typing import Sequence


class BuildToolsError(RuntimeError):
    """Base class for every unrecoverable pipeline failure."""

    pass


class ConfigurationError(BuildToolsError):
    """Raised when required inputs are missing before any mutation happens."""

    pass


class ManifestError(ConfigurationError):
    """Raised when ``composer.json`` is absent, unreadable or not valid JSON."""

    pass


class ToolError(BuildToolsError):
    """Raised when an external tool exits with a non-zero status.

    Attributes:
        cmd: Command vector that was executed.
        returncode: Exit status, or ``None`` when the executable was missing.
        stderr: Captured error output (may be empty).
    """

    def __init__(
        self,
        cmd: Sequence[str],
        returncode: int | None,
        stderr: str = "",
    ) -> None:
        self.cmd = [str(c) for c in cmd]
        self.returncode = returncode
        self.stderr = stderr or ""
        prog = self.cmd[0] if self.cmd else "<empty>"
        if returncode is None:
            msg = f"'{prog}' not found in PATH"
        else:
            msg = f"'{prog}' exited with status {returncode}"
        if self.stderr.strip():
            msg += f":\n{self.stderr.strip()}"
        super().__init__(msg)
