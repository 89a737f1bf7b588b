"""``addonforge check PATH`` — can the add-on be activated here?

Checks the host version bounds, the minimum Java version and, when a
catalog or an install directory is given, the direct dependencies.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from addonforge.config import settings
from addonforge.core.catalog import AddOnCatalog
from addonforge.core.compatibility import CompatibilityGate
from addonforge.core.dependencies import DependencyChecker
from addonforge.core.errors import AddOnError
from addonforge.core.scanner import AddOnScanner
from addonforge.models.descriptor import PackageDescriptor

console = Console()


def check_cmd(
    path: Path = typer.Argument(..., help="Package file to check."),
    host_version: Optional[str] = typer.Option(
        None, "--host-version", help="Host version (default: ADDONFORGE_HOST_VERSION)."
    ),
    java_version: Optional[str] = typer.Option(
        None, "--java-version", help="Java version (default: ADDONFORGE_JAVA_VERSION)."
    ),
    catalog: Optional[Path] = typer.Option(
        None, "--catalog", "-c", help="Release catalog used to resolve dependencies."
    ),
    installed: Optional[Path] = typer.Option(
        None, "--installed", "-i", help="Directory of installed add-ons."
    ),
) -> None:
    """Check an add-on against the host, the runtime and its dependencies."""
    try:
        addon = PackageDescriptor.from_archive(path)
        known: list[PackageDescriptor] = []
        if catalog is not None:
            known.extend(AddOnCatalog.from_path(catalog))
        if installed is not None:
            known.extend(AddOnScanner().scan(installed).add_ons.values())
    except (AddOnError, OSError) as e:
        console.print(f"[bold red]Check failed:[/bold red] {e}")
        raise typer.Exit(code=1)

    gate = CompatibilityGate(
        host_version=host_version or settings.host_version,
        java_version=java_version or settings.java_version,
    )
    problems = gate.issues(addon)
    if catalog is not None or installed is not None:
        missing = DependencyChecker(known).unmet(addon)
        problems.extend(f"{addon.id} requires missing add-on {dep}." for dep in missing)

    table = Table(title=f"Compatibility of {addon}")
    table.add_column("Check")
    table.add_column("Result", justify="center")
    table.add_row("Host version", _mark(gate.can_load(addon)))
    table.add_row("Java version", _mark(gate.can_run(addon)))
    console.print(table)

    for problem in problems:
        console.print(f"[red]-[/red] {problem}")
    if problems:
        raise typer.Exit(code=1)
    console.print("[green]Add-on can be activated.[/green]")


def _mark(ok: bool) -> str:
    return "[green]OK[/green]" if ok else "[red]FAIL[/red]"
