"""`process file` and `process batch` commands."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from typer import BadParameter

from playlist_report.application.engine import Engine
from playlist_report.cli.common import (
    DEBUG_OPTION,
    DELIMITER_OPTION,
    FORMAT_OPTION,
    LOG_FORMAT_OPTION,
    LOG_LEVEL_OPTION,
    LOGS_DIR_OPTION,
    QUIET_OPTION,
    LogFormat,
    OutputFormat,
    build_settings,
    collect_input_files,
)
from playlist_report.infrastructure.io.run_plan import BatchItem, plan_batch
from playlist_report.models.run import RunRequest, RunResult

app = typer.Typer(
    help=(
        "Convert playlist exports into report workbooks.\n\n"
        "`process file` converts one export; `process batch` walks a directory tree "
        "and mirrors its folders under the output directory."
    ),
    no_args_is_help=True,
    rich_markup_mode="markdown",
)


def _echo_result(result: RunResult) -> None:
    if result.succeeded:
        typer.echo(f"{result.processed_file} -> {result.output_path} ({result.row_count} rows)")
    else:
        reason = result.error.message if result.error is not None else "unknown error"
        typer.echo(f"{result.processed_file}: failed: {reason}", err=True)


def _echo_conflict(item: BatchItem) -> None:
    typer.echo(
        f"{item.input_file.name}: failed: {item.output_path.name} is already written by {item.conflict}",
        err=True,
    )


@app.command("file")
def process_file(
    input_file: Path = typer.Option(
        ...,
        "--input",
        "-i",
        exists=True,
        dir_okay=False,
        resolve_path=True,
        help="Playlist export to convert.",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Workbook path; its suffix must match --format. Default: <input dir>/<safe stem>.xls",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        file_okay=False,
        resolve_path=True,
        help="Directory for the workbook when --output is not given.",
    ),
    logs_dir: Optional[Path] = LOGS_DIR_OPTION,
    output_format: Optional[OutputFormat] = FORMAT_OPTION,
    delimiter: Optional[str] = DELIMITER_OPTION,
    log_format: Optional[LogFormat] = LOG_FORMAT_OPTION,
    log_level: Optional[str] = LOG_LEVEL_OPTION,
    debug: bool = DEBUG_OPTION,
    quiet: bool = QUIET_OPTION,
) -> None:
    """Convert a single playlist export."""

    if output is not None and output_dir is not None:
        raise BadParameter("use either --output or --output-dir, not both", param_hint="output")

    settings = build_settings(
        output_format=output_format,
        delimiter=delimiter,
        log_format=log_format,
        log_level=log_level,
        debug=debug,
        quiet=quiet,
    )
    if output is not None and output.suffix.lower() != settings.output_suffix:
        raise BadParameter(f"--output must end with {settings.output_suffix}", param_hint="output")

    result = Engine(settings=settings).run(
        RunRequest(
            input_file=input_file,
            output_dir=output_dir,
            output_path=output.expanduser().resolve() if output is not None else None,
            logs_dir=logs_dir,
        )
    )
    _echo_result(result)
    raise typer.Exit(code=0 if result.succeeded else 1)


@app.command("batch")
def process_batch(
    input_dir: Path = typer.Option(
        ...,
        "--input-dir",
        exists=True,
        file_okay=False,
        resolve_path=True,
        help="Directory scanned recursively for exports.",
    ),
    output_dir: Path = typer.Option(
        ...,
        "--output-dir",
        file_okay=False,
        resolve_path=True,
        help="Root for generated workbooks; sub-folders of --input-dir are recreated here.",
    ),
    include: List[str] = typer.Option([], "--include", help="Glob(s) an input must match."),
    exclude: List[str] = typer.Option([], "--exclude", help="Glob(s) that skip an input."),
    logs_dir: Optional[Path] = LOGS_DIR_OPTION,
    output_format: Optional[OutputFormat] = FORMAT_OPTION,
    delimiter: Optional[str] = DELIMITER_OPTION,
    log_format: Optional[LogFormat] = LOG_FORMAT_OPTION,
    log_level: Optional[str] = LOG_LEVEL_OPTION,
    debug: bool = DEBUG_OPTION,
    quiet: bool = QUIET_OPTION,
) -> None:
    """Convert every supported export under a directory; exit 1 if any failed."""

    settings = build_settings(
        output_format=output_format,
        delimiter=delimiter,
        log_format=log_format,
        log_level=log_level,
        debug=debug,
        quiet=quiet,
    )

    inputs = collect_input_files(input_dir=input_dir, include=include, exclude=exclude, settings=settings)
    if not inputs:
        raise BadParameter("no supported inputs found after --include/--exclude", param_hint="input_dir")

    items = plan_batch(
        inputs,
        input_dir=input_dir,
        output_dir=output_dir,
        logs_dir=logs_dir,
        output_suffix=settings.output_suffix,
    )

    engine = Engine(settings=settings)
    failures = 0
    for item in items:
        if item.conflict is not None:
            _echo_conflict(item)
            failures += 1
            continue

        result = engine.run(RunRequest(input_file=item.input_file, output_path=item.output_path, logs_dir=item.logs_dir))
        _echo_result(result)
        failures += 0 if result.succeeded else 1

    raise typer.Exit(code=1 if failures else 0)


__all__ = ["app"]
