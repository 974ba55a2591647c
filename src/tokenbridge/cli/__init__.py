"""
tokenbridge CLI.

- convert.py: detect, import, collections and inspect commands
- export.py: ``export`` sub-app (colors, spacing)
- common.py: shared helpers
"""

import platform

import typer

from tokenbridge import __version__
from tokenbridge.cli.common import configure_logging
from tokenbridge.cli.convert import (
    collections_command,
    detect_command,
    import_command,
    inspect_command,
)
from tokenbridge.cli.export import export_app


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"tokenbridge version {__version__}")
        typer.echo(f"Python {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


app = typer.Typer(
    help="""tokenbridge - design-token format conversion

  • detect, inspect: identify an uploaded variables document
  • import: convert it to the raw variable format
  • collections: export live raw variables as a collections document
  • export colors|spacing: render generated systems to JSON files
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """tokenbridge CLI main callback for global options."""
    configure_logging(verbose)


app.command(name="detect")(detect_command)
app.command(name="import")(import_command)
app.command(name="collections")(collections_command)
app.command(name="inspect")(inspect_command)
app.add_typer(export_app, name="export")


def main() -> None:
    app()


__all__ = ["app", "main", "version_callback", "export_app"]
