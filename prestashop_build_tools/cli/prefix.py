"""
Prefix the namespaces of Composer dependencies.

Invoked through ``prestashop-build-tools prefix-vendor``. Relative vendor
directories are resolved against ``--working-dir``.
"""

from __future__ import annotations

from pathlib import Path

import click

from ..config import load_prefix_config
from ..pipelines.prefix import prefix_vendor
from ..utils.display import echo_banner, echo_step, echo_success, echo_warning
from ._shared import CONTEXT_SETTINGS, init_logging, pipeline_errors


@click.command(
    name="prefix-vendor",
    context_settings=CONTEXT_SETTINGS,
    help="Prefix composer vendor namespaces with PHP-Scoper.",
)
@click.option(
    "-d", "--working-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Use the given directory as working directory.  [default: cwd]",
)
@click.option(
    "-i", "--vendor-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("vendor"),
    help="Vendor directory, relative to the working directory.",
)
@click.option(
    "-o", "--vendor-prefixed-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("vendor-prefixed"),
    help="Output directory for the prefixed vendors.",
)
@click.option(
    "-c", "--config", "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="PHP-Scoper config file (default: project or packaged).",
)
@click.option("-p", "--prefix", help="PHP-Scoper namespace prefix.")
@click.option(
    "--move-vendor/--no-move-vendor",
    default=True,
    help="Move the prefixed vendors back into the vendor directory.",
)
@click.pass_obj
def cli(
    ctx_obj,
    working_dir: Path | None,
    vendor_dir: Path,
    vendor_prefixed_dir: Path,
    config_file: Path | None,
    prefix: str | None,
    move_vendor: bool,
) -> None:
    """Entry-point for ``prestashop-build-tools prefix-vendor``."""
    working_dir = (working_dir or Path.cwd()).resolve()
    init_logging(ctx_obj, working_dir)
    echo_banner("Prefix vendor")

    with pipeline_errors():
        cfg = load_prefix_config(
            working_dir=working_dir,
            vendor_dir=vendor_dir,
            vendor_prefixed_dir=vendor_prefixed_dir,
            config_file=config_file,
            prefix=prefix,
            move_vendor=move_vendor,
        )
        echo_step(f"prefix: {cfg.prefix}")
        result = prefix_vendor(cfg)

    for rel in result.packages:
        echo_step(rel.as_posix())
    if not result.moved:
        echo_warning(f"Prefixed packages left in {cfg.vendor_prefixed_dir}")
    echo_success(f"Prefixed {len(result.packages)} package(s)")
