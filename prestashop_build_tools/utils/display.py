"""Utility functions to print formatted CLI messages for progress updates."""

from __future__ import annotations

import click

__all__ = ["echo_banner", "echo_step", "echo_success", "echo_warning"]


def echo_banner(text: str) -> None:
    """Print a colourful banner announcing a command.

    Args:
        text: Banner text.
    """
    click.secho(f"\n=== {text} ===", fg="cyan")


def echo_step(text: str) -> None:
    """Echo a bullet describing one pipeline step."""
    click.echo(f"  • {text}")


def echo_success(text: str) -> None:
    """Echo a green success message prefixed with a tick.

    Args:
        text: Message to display.
    """
    click.secho(f"✓ {text}", fg="green")


def echo_warning(text: str) -> None:
    click.secho(f"! {text}", fg="yellow", err=True)
