"""
Package-level logging configuration.

* Rich console output (colourised, nicely formatted).
* Rotating **JSON** log file inside ``<working-dir>/.pbt/logs/`` when a
  working directory is known (or ``$PBT_LOG_DIR`` when set).
* Optional plain-text mirror controlled via ``--save-logfile`` on the CLI.

The public helper :func:`setup_logging` wires everything and should be the
sole entry-point used by sub-commands.
"""

from __future__ import annotations

import atexit
import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

import structlog
from rich.logging import RichHandler
from structlog.dev import ConsoleRenderer as StructlogConsoleRenderer
from structlog.stdlib import LoggerFactory

__all__ = ["setup_logging", "log_dir_for"]

#: Name of the hidden staging directory created under the working directory.
STAGING_DIRNAME = ".pbt"


def log_dir_for(working_dir: Path | None) -> Path | None:
    """Return the directory that receives the JSON log, if any.

    Args:
        working_dir: Module working directory. ``None`` disables the
            working-directory fallback.

    Returns:
        ``$PBT_LOG_DIR`` when set, otherwise ``<working_dir>/.pbt/logs`` or
        ``None`` when neither is available.
    """
    env_dir = os.environ.get("PBT_LOG_DIR")
    if env_dir:
        return Path(env_dir).expanduser()
    if working_dir is not None and working_dir.is_dir():
        return working_dir / STAGING_DIRNAME / "logs"
    return None


def _json_file_handler(logdir: Path, level: int) -> logging.Handler:
    """Return a rotating file handler writing ``prestashop-build-tools.log``."""
    logdir.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        filename=logdir / "prestashop-build-tools.log",
        maxBytes=5_000_000,  # ~5 MB before rollover
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def _plain_text_file_handler(
    path: Optional[Path], level: int
) -> logging.Handler | None:
    """Return a plain-text file handler or *None* when *path* is *None*.

    Args:
        path: Destination file.
        level: Log-level for the handler.
    """
    if path is None:
        return None

    path = path.expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, encoding="utf-8", mode="a")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    atexit.register(handler.close)
    return handler


def setup_logging(
    *,
    working_dir: Path | None = None,
    verbose: bool = False,
    debug: bool = False,
    extra_text_log: Optional[Path] = None,
) -> None:
    """Configure rich console logging and optional file mirrors.

    Args:
        working_dir: Module working directory used to locate the JSON log.
        verbose: Emit INFO-level messages to the console.
        debug: Emit DEBUG-level messages and rich tracebacks with locals.
        extra_text_log: Optional path for a plain-text mirror of console output.
    """
    console_lvl = (
        logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    )
    file_lvl = logging.DEBUG if debug else logging.INFO

    handlers: list[logging.Handler] = [
        RichHandler(
            level=console_lvl,
            rich_tracebacks=True,
            tracebacks_show_locals=debug,
            markup=False,
        )
    ]

    logdir = log_dir_for(working_dir)
    if logdir is not None:
        handlers.append(_json_file_handler(logdir, file_lvl))

    txt_handler = _plain_text_file_handler(extra_text_log, console_lvl)
    if txt_handler:
        handlers.append(txt_handler)

    # Root logger stays at DEBUG; handlers filter.
    logging.basicConfig(
        level=logging.DEBUG,
        handlers=handlers,
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            (
                StructlogConsoleRenderer()
                if verbose or debug
                else structlog.processors.JSONRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            min(console_lvl, file_lvl)
        ),
        logger_factory=LoggerFactory(),
    )
