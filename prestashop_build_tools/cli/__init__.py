"""Expose the project-wide Click group for the ``prestashop-build-tools`` script.

The group wires the global verbosity flags into the Click context and
registers every sub-command lazily:

* ``build-module``  – create ``<module>.zip``;
* ``prefix-vendor`` – prefix vendored namespaces with PHP-Scoper;
* ``install``       – configure a module template interactively.

Logging is configured by each sub-command once its working directory is
known.
"""

from __future__ import annotations

import importlib
from pathlib import Path

import click

from prestashop_build_tools import __version__

from ._shared import CONTEXT_SETTINGS


class LazyGroup(click.Group):
    """Click group that imports sub-commands lazily."""

    def __init__(self, *args, **kwargs):
        self._lazy: dict[str, str] = {}
        super().__init__(*args, **kwargs)

    def set_lazy_command(self, name: str, target: str) -> None:
        """Register *name* to be imported from ``module:attr`` on first use."""
        self._lazy[name] = target

    def list_commands(self, ctx):
        return sorted(set(super().list_commands(ctx)) | set(self._lazy))

    def get_command(self, ctx, cmd_name):  # noqa: D401 - Click signature
        cmd = super().get_command(ctx, cmd_name)
        if cmd is not None:
            return cmd
        target = self._lazy.get(cmd_name)
        if not target:
            return None
        module_name, attr = target.split(":", 1)
        cmd = getattr(importlib.import_module(module_name), attr)
        self.add_command(cmd, name=cmd_name)
        return cmd


@click.group(
    cls=LazyGroup,
    context_settings=CONTEXT_SETTINGS,
    help="""\b
prestashop-build-tools – build, prefix and scaffold PrestaShop modules.
""",
)
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="INFO-level console output.")
@click.option("--debug", is_flag=True, help="DEBUG console output.")
@click.option(
    "--save-logfile",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Mirror console output into this plain-text file.",
)
@click.pass_context
def main(
    ctx: click.Context,
    verbose: bool,
    debug: bool,
    save_logfile: Path | None,
) -> None:
    """Root command executed by *prestashop-build-tools*."""
    ctx.obj = {
        "verbose": verbose,
        "debug": debug,
        "save_logfile": save_logfile,
    }


main.set_lazy_command("build-module", "prestashop_build_tools.cli.build:cli")
main.set_lazy_command("prefix-vendor", "prestashop_build_tools.cli.prefix:cli")
main.set_lazy_command("install", "prestashop_build_tools.cli.install:cli")

cli = main
__all__: list[str] = ["main"]
