"""Options and helpers shared by the `process` commands."""

from __future__ import annotations

import fnmatch
import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

import typer
from pydantic import ValidationError
from typer import BadParameter

from playlist_report.infrastructure.settings import Settings


class LogFormat(str, Enum):
    text = "text"
    ndjson = "ndjson"


class OutputFormat(str, Enum):
    xls = "xls"
    xlsx = "xlsx"


def console_log_level(*, log_level: Optional[str], debug: bool, quiet: bool, default: int) -> int:
    """``--quiet`` beats ``--debug``, which beats ``--log-level``, which beats settings."""

    if quiet:
        return logging.WARNING
    if debug:
        return logging.DEBUG
    if not log_level:
        return default

    level = logging.getLevelNamesMapping().get(log_level.upper())
    if level is None:
        choices = ", ".join(name.lower() for name in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"))
        raise BadParameter(f"unknown level {log_level!r} (choose from {choices})", param_hint="--log-level")
    return level


def build_settings(
    *,
    output_format: Optional[OutputFormat],
    delimiter: Optional[str],
    log_format: Optional[LogFormat],
    log_level: Optional[str],
    debug: bool,
    quiet: bool,
) -> Settings:
    """Settings from the working directory and environment, with CLI flags applied last."""

    flags: dict[str, object] = {}
    if output_format is not None:
        flags["output_format"] = output_format.value
    if delimiter is not None:
        flags["delimiter"] = delimiter
    if log_format is not None:
        flags["log_format"] = log_format.value

    try:
        settings = Settings.load(**flags)
    except ValidationError as exc:
        reasons = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in exc.errors())
        raise BadParameter(reasons) from exc

    level = console_log_level(log_level=log_level, debug=debug, quiet=quiet, default=settings.log_level)
    return settings.model_copy(update={"log_level": level})


def collect_input_files(
    *,
    input_dir: Path,
    include: Sequence[str],
    exclude: Sequence[str],
    settings: Settings,
) -> List[Path]:
    """Supported files under ``input_dir``, sorted.

    Globs are tried against the path relative to ``input_dir`` and against the
    bare file name, so ``*.csv`` matches at any depth.
    """

    root = input_dir.expanduser().resolve()
    extensions = set(settings.supported_file_extensions)

    def matches(path: Path, patterns: Sequence[str]) -> bool:
        relative = path.relative_to(root).as_posix()
        return any(fnmatch.fnmatch(relative, p) or fnmatch.fnmatch(path.name, p) for p in patterns)

    found: List[Path] = []
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        if extensions and path.suffix.lower() not in extensions:
            continue
        if include and not matches(path, include):
            continue
        if exclude and matches(path, exclude):
            continue
        found.append(path)
    return found


LOGS_DIR_OPTION = typer.Option(
    None,
    "--logs-dir",
    file_okay=False,
    resolve_path=True,
    help="Where run logs go (default: next to each workbook).",
)
FORMAT_OPTION = typer.Option(None, "--format", "-f", case_sensitive=False, help="Workbook format (default: xls).")
DELIMITER_OPTION = typer.Option(None, "--delimiter", "-d", help="Field delimiter of the export (default: ';').")
LOG_FORMAT_OPTION = typer.Option(None, "--log-format", case_sensitive=False, help="text or ndjson.")
LOG_LEVEL_OPTION = typer.Option(None, "--log-level", help="Console log level (debug, info, warning, error).")
DEBUG_OPTION = typer.Option(False, "--debug", help="Shorthand for --log-level debug.")
QUIET_OPTION = typer.Option(False, "--quiet", help="Only warnings and errors on the console.")


__all__ = [
    "DEBUG_OPTION",
    "DELIMITER_OPTION",
    "FORMAT_OPTION",
    "LOGS_DIR_OPTION",
    "LOG_FORMAT_OPTION",
    "LOG_LEVEL_OPTION",
    "QUIET_OPTION",
    "LogFormat",
    "OutputFormat",
    "build_settings",
    "collect_input_files",
    "console_log_level",
]
