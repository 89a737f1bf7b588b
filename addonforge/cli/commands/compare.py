"""``addonforge compare CANDIDATE INCUMBENT`` — run the update decision."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from addonforge.core.errors import AddOnError
from addonforge.core.update_decider import is_update_to
from addonforge.models.descriptor import PackageDescriptor

console = Console()


def compare_cmd(
    candidate: Path = typer.Argument(..., help="Package that may replace the incumbent."),
    incumbent: Path = typer.Argument(..., help="Currently installed package."),
) -> None:
    """Report whether CANDIDATE is an update to INCUMBENT.

    Exits with code 1 when it is not, or when either package is invalid or
    the two belong to different add-ons.
    """
    try:
        new = PackageDescriptor.from_archive(candidate)
        old = PackageDescriptor.from_archive(incumbent)
        update = is_update_to(new, old)
    except AddOnError as e:
        console.print(f"[bold red]Cannot compare:[/bold red] {e}")
        raise typer.Exit(code=1)

    if update:
        console.print(f"[green]{new} is an update to {old}.[/green]")
    else:
        console.print(f"[yellow]{new} is not an update to {old}.[/yellow]")
        raise typer.Exit(code=1)
