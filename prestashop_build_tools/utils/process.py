"""Single entry-point for running external tools.

Every shell-out (``rsync``, ``composer``, ``php-scoper``) goes through
:func:`run_cmd` so exit statuses are checked uniformly and failures surface
as :class:`~prestashop_build_tools.utils.errors.ToolError`.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Mapping, Optional, Sequence

import structlog

from .errors import ToolError

log = structlog.get_logger()


def run_cmd(
    cmd: Sequence[str | Path],
    *,
    cwd: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
    capture: bool = True,
) -> subprocess.CompletedProcess:
    """Execute *cmd* and raise unless it exits cleanly.

    Args:
        cmd: Command vector passed to :func:`subprocess.run`.
        cwd: Optional working directory for the child process.
        env: Optional full environment for the child process.
        capture: When True, capture stdout and stderr as text.

    Returns:
        :class:`subprocess.CompletedProcess` describing the execution result.

    Raises:
        ToolError: If the executable is missing or exits with a non-zero
            status. The captured stderr is attached to the exception.
    """
    cmd = [str(c) for c in cmd]
    log.info("run-cmd", cmd=" ".join(cmd), cwd=str(cwd) if cwd else None)
    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            env=dict(env) if env is not None else None,
            capture_output=capture,
            text=True,
        )
    except FileNotFoundError as exc:
        log.error("run-cmd.missing", prog=cmd[0])
        raise ToolError(cmd, None) from exc

    if proc.returncode != 0:
        log.error("run-cmd.failed", prog=cmd[0], returncode=proc.returncode)
        raise ToolError(cmd, proc.returncode, proc.stderr if capture else "")
    return proc
