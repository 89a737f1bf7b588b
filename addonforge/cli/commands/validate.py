"""``addonforge validate PATH...`` — classify candidate add-on packages."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from addonforge.core.validator import ManifestValidator

console = Console()


def validate_cmd(
    paths: list[Path] = typer.Argument(..., help="Package files to validate."),
) -> None:
    """Validate each package and print its classification.

    Exits with code 1 if any package is rejected.
    """
    validator = ManifestValidator()
    table = Table(title="Add-on Validation")
    table.add_column("Path", style="cyan")
    table.add_column("Result", no_wrap=True)
    table.add_column("Version", no_wrap=True)

    rejected = []
    for path in paths:
        result = validator.validate(path)
        if result.is_valid:
            manifest = result.manifest
            version = f"{manifest.version} ({manifest.status.value})"
            table.add_row(str(path), "[green]VALID[/green]", version)
        else:
            rejected.append(result)
            table.add_row(str(path), f"[red]{result.validity.name}[/red]", "-")

    console.print(table)
    for result in rejected:
        console.print(f"[red]{result.validity.name}[/red] {result.reason}")
    if rejected:
        raise typer.Exit(code=1)
