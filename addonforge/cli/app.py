"""Main Typer application — imports and registers all CLI commands.

Entry point: ``addonforge`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from addonforge.cli.commands.check import check_cmd
from addonforge.cli.commands.compare import compare_cmd
from addonforge.cli.commands.info import info_cmd
from addonforge.cli.commands.scan import scan_cmd
from addonforge.cli.commands.validate import validate_cmd
from addonforge.config import settings

app = typer.Typer(
    name="addonforge",
    help="addonforge: validate add-on packages and decide updates and compatibility.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    """Configure logging before any command runs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


# Register subcommands
app.command(name="validate", help="Validate add-on package files.")(validate_cmd)
app.command(name="info", help="Show the descriptor of an add-on package.")(info_cmd)
app.command(name="compare", help="Decide whether one package updates another.")(compare_cmd)
app.command(name="check", help="Check host, Java and dependency compatibility.")(check_cmd)
app.command(name="scan", help="Scan a directory for the newest add-on of each id.")(scan_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
