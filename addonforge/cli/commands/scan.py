"""``addonforge scan DIR`` — list the newest valid add-on of each id."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from addonforge.core.scanner import AddOnScanner

console = Console()


def scan_cmd(
    directory: Path = typer.Argument(..., help="Directory containing add-on packages."),
    workers: int = typer.Option(0, "--workers", "-w", help="Validation threads (0: default)."),
) -> None:
    """Scan a directory of packages."""
    if not directory.is_dir():
        console.print(f"[bold red]Not a directory:[/bold red] {directory}")
        raise typer.Exit(code=1)

    report = AddOnScanner(workers=workers or None).scan(directory)

    if not report.add_ons and not report.rejected:
        console.print("[dim]No add-on packages found.[/dim]")
        return

    table = Table(title=f"Add-ons in {directory}")
    table.add_column("Id", style="cyan")
    table.add_column("Version", style="green")
    table.add_column("Status")
    table.add_column("File")
    for addon in report.sorted_add_ons():
        table.add_row(addon.id, str(addon.version), addon.status.value, addon.file.name)
    console.print(table)

    for addon in report.superseded:
        console.print(f"[dim]Superseded:[/dim] {addon.file.name} ({addon})")
    for result in report.rejected:
        console.print(f"[red]Rejected:[/red] {result.reason}")
