"""CLI entrypoint for :mod:`playlist_report`.

- `process` - convert playlist exports (subcommands: `file`, `batch`).
- `version` - print the package version.
"""

from __future__ import annotations

import typer

from playlist_report import __version__
from playlist_report.cli.process import app as process_app


app = typer.Typer(
    help=(
        "Playlist Report: convert semicolon-delimited playlist exports into broadcast report workbooks.\n\n"
        "### Convert a single export\n"
        "```bash\n"
        "playlist-report process file --input played.csv --output-dir reports/\n"
        "```\n\n"
        "### Convert a directory of exports\n"
        "```bash\n"
        "playlist-report process batch --input-dir incoming/ --output-dir reports/\n"
        "```\n"
    ),
    no_args_is_help=True,
    rich_markup_mode="markdown",
)

app.add_typer(process_app, name="process")


@app.command("version")
def version_command() -> None:
    """Print the package version."""
    typer.echo(__version__)


def main() -> None:
    """Entrypoint used by console scripts and `python -m playlist_report`."""
    app()


__all__ = ["app", "main"]
