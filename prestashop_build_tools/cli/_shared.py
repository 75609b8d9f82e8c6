"""Helpers shared by every sub-command."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator

import click
import structlog

from ..utils.errors import BuildToolsError
from ..utils.logging import setup_logging

log = structlog.get_logger()

CONTEXT_SETTINGS: Dict[str, Any] = dict(
    help_option_names=["-h", "--help"],
    show_default=True,
    max_content_width=120,
)


def init_logging(ctx_obj: Dict[str, Any] | None, working_dir: Path | None) -> None:
    """Configure logging once the command knows its working directory.

    With *working_dir* set to ``None`` the JSON log is only written when
    ``$PBT_LOG_DIR`` is set.
    """
    ctx_obj = ctx_obj or {}
    setup_logging(
        working_dir=working_dir,
        verbose=bool(ctx_obj.get("verbose")),
        debug=bool(ctx_obj.get("debug")),
        extra_text_log=ctx_obj.get("save_logfile"),
    )


@contextmanager
def pipeline_errors() -> Iterator[None]:
    """Turn pipeline exceptions into :class:`click.ClickException`."""
    try:
        yield
    except BuildToolsError as exc:
        log.error("command.failed", error=str(exc))
        raise click.ClickException(str(exc)) from exc
