"""``addonforge info PATH`` — show the descriptor built from a package."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from addonforge.core.errors import AddOnError
from addonforge.models.descriptor import PackageDescriptor

console = Console()


def info_cmd(
    path: Path = typer.Argument(..., help="Package file to describe."),
) -> None:
    """Print the id, version, status and requirements of a package."""
    try:
        addon = PackageDescriptor.from_archive(path)
    except AddOnError as e:
        console.print(f"[bold red]Invalid add-on:[/bold red] {e}")
        raise typer.Exit(code=1)

    lines = [
        f"[bold]Id:[/bold]           {addon.id}",
        f"[bold]Version:[/bold]      {addon.version}",
        f"[bold]Status:[/bold]       {addon.status.value}",
        f"[bold]File version:[/bold] {addon.file_version}",
        f"[bold]Canonical:[/bold]    {addon.normalised_file_name()}",
    ]
    if addon.name:
        lines.insert(1, f"[bold]Name:[/bold]         {addon.name}")
    if addon.not_before_version is not None:
        lines.append(f"[bold]Not before:[/bold]   {addon.not_before_version}")
    if addon.not_from_version is not None:
        lines.append(f"[bold]Not from:[/bold]     {addon.not_from_version}")
    if addon.min_java_version is not None:
        lines.append(f"[bold]Java:[/bold]         >= {addon.min_java_version}")
    if addon.dependencies:
        lines.append(f"[bold]Depends on:[/bold]   {', '.join(addon.dependencies)}")
    if not addon.bundle.is_empty:
        lines.append(f"[bold]Bundle:[/bold]       {addon.bundle.base_name}")
    if not addon.helpset.is_empty:
        lines.append(f"[bold]Help set:[/bold]     {addon.helpset.base_name}")

    console.print(Panel("\n".join(lines), title=f"Add-on {addon.id}", border_style="blue"))
