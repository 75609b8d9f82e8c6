"""Configure the module template in the current directory.

Invoked through ``prestashop-build-tools install``; it takes no options and
always works on the current directory.
"""

from __future__ import annotations

from pathlib import Path

import click

from ..pipelines.scaffold import configure_module
from ..utils.display import echo_banner, echo_step, echo_success
from ._shared import CONTEXT_SETTINGS, init_logging, pipeline_errors


@click.command(
    name="install",
    context_settings=CONTEXT_SETTINGS,
    help="Configure the module for the first installation.",
)
@click.pass_obj
def cli(ctx_obj) -> None:
    """Entry-point for ``prestashop-build-tools install``."""
    working_dir = Path.cwd().resolve()
    # No .pbt/ inside the template unless $PBT_LOG_DIR is set.
    init_logging(ctx_obj, None)
    echo_banner("Configure module")

    with pipeline_errors():
        result = configure_module(working_dir)

    echo_step(f"{len(result.rewritten)} file(s) configured")
    echo_success(f"Module ready: {result.entry_file}")
