"""
Create the publishable artifact for the current module.

Invoked through ``prestashop-build-tools build-module``.

Key flags
---------
* ``--working-dir``  – module source tree (default: current directory)
* ``--output-dir``   – where ``<module>.zip`` lands (default: working dir)
* ``--module-name``  – falls back to ``extra.prestashop-build-tools.name``
* ``--exclude``      – rsync exclude file (default: project or packaged)
* ``--license``      – license text stamped on every source file
* ``--authoritative`` – run ``composer dump-autoload --classmap-authoritative``
"""

from __future__ import annotations

from pathlib import Path

import click

from ..config import load_build_config
from ..pipelines.build import build_module
from ..utils.display import echo_banner, echo_step, echo_success
from ._shared import CONTEXT_SETTINGS, init_logging, pipeline_errors


@click.command(
    name="build-module",
    context_settings=CONTEXT_SETTINGS,
    help="Create the publishable artifact for the current module.",
)
@click.option(
    "-d", "--working-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Use the given directory as working directory.  [default: cwd]",
)
@click.option(
    "-b", "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory receiving the artifact.  [default: working dir]",
)
@click.option("-m", "--module-name", help="Name of the module you are building.")
@click.option(
    "-e", "--exclude", "exclude_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="rsync-like exclude file to exclude files from the artifact.",
)
@click.option(
    "--license", "license_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="File of license to apply to all files.",
)
@click.option(
    "-a", "--authoritative",
    is_flag=True,
    help="Generate classmap authoritative autoload.",
)
@click.pass_obj
def cli(
    ctx_obj,
    working_dir: Path | None,
    output_dir: Path | None,
    module_name: str | None,
    exclude_file: Path | None,
    license_file: Path | None,
    authoritative: bool,
) -> None:
    """Entry-point for ``prestashop-build-tools build-module``."""
    working_dir = (working_dir or Path.cwd()).resolve()
    init_logging(ctx_obj, working_dir)
    echo_banner("Build module")

    with pipeline_errors():
        cfg = load_build_config(
            working_dir=working_dir,
            output_dir=output_dir,
            module_name=module_name,
            exclude_file=exclude_file,
            license_file=license_file,
            authoritative=authoritative,
        )
        echo_step(f"module: {cfg.module_name}")
        result = build_module(cfg)

    echo_step(f"{len(result.marker_files)} index.php file(s) added")
    echo_step(f"{len(result.stamped_files)} license header(s) updated")
    echo_success(f"Created {result.artifact}")
