"""Where a run's workbook and log file go."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from playlist_report.models.errors import InputError
from playlist_report.models.run import RunRequest

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9]")

LOG_FILE_SUFFIXES = {"text": "_report.log", "ndjson": "_report_events.ndjson"}


@dataclass(frozen=True)
class RunPlan:
    input_file: Path
    output_path: Path
    logs_path: Path

    @property
    def output_dir(self) -> Path:
        return self.output_path.parent

    @property
    def logs_dir(self) -> Path:
        return self.logs_path.parent


@dataclass(frozen=True)
class BatchItem:
    """A planned batch conversion.

    ``conflict`` names the earlier input that already claimed ``output_path``;
    such items must not run.
    """

    input_file: Path
    output_path: Path
    logs_dir: Path
    conflict: Path | None = None


def safe_output_stem(stem: str) -> str:
    """Replace every non-alphanumeric character of a file stem with ``_``."""

    return _UNSAFE_NAME_CHARS.sub("_", stem) or "converted_data"


def _absolute(path: Path) -> Path:
    return path.expanduser().resolve()


def plan_run(request: RunRequest, *, output_suffix: str = ".xls", log_format: str = "text") -> RunPlan:
    """Resolve a :class:`RunRequest` into absolute input, output and log paths."""

    input_file = _absolute(request.input_file)
    if not input_file.exists():
        raise InputError(f"Input file not found: {input_file}")
    if input_file.is_dir():
        raise InputError(f"Input file must be a file, not a directory: {input_file}")

    if request.output_path is not None:
        output_path = _absolute(request.output_path)
        if output_path.suffix.lower() != output_suffix:
            raise InputError(f"Output path must end with {output_suffix}: {output_path}")
    else:
        output_dir = _absolute(request.output_dir) if request.output_dir is not None else input_file.parent
        output_path = output_dir / f"{safe_output_stem(input_file.stem)}{output_suffix}"

    logs_dir = _absolute(request.logs_dir) if request.logs_dir is not None else output_path.parent
    if request.logs_path is not None:
        logs_path = _absolute(logs_dir / request.logs_path.expanduser())
    else:
        logs_path = logs_dir / f"{input_file.stem}{LOG_FILE_SUFFIXES[log_format]}"

    return RunPlan(input_file=input_file, output_path=output_path, logs_path=logs_path)


def plan_batch(
    inputs: Iterable[Path],
    *,
    input_dir: Path,
    output_dir: Path,
    logs_dir: Path | None = None,
    output_suffix: str = ".xls",
) -> list[BatchItem]:
    """Mirror each input's folder (relative to ``input_dir``) under ``output_dir``.

    ``jan/played.csv`` and ``feb/played.csv`` therefore get separate workbooks.
    Inputs whose safe names still collide inside one folder (``a b.csv`` and
    ``a_b.csv``) are flagged through ``BatchItem.conflict``.
    """

    input_dir = _absolute(input_dir)
    output_dir = _absolute(output_dir)
    logs_root = _absolute(logs_dir) if logs_dir is not None else output_dir

    claimed: dict[str, Path] = {}
    items: list[BatchItem] = []
    for input_file in inputs:
        input_file = _absolute(input_file)
        relative = input_file.parent.relative_to(input_dir)
        output_path = output_dir / relative / f"{safe_output_stem(input_file.stem)}{output_suffix}"

        key = os.path.normcase(str(output_path))
        conflict = claimed.setdefault(key, input_file)
        items.append(
            BatchItem(
                input_file=input_file,
                output_path=output_path,
                logs_dir=logs_root / relative,
                conflict=None if conflict == input_file else conflict,
            )
        )
    return items


__all__ = ["BatchItem", "LOG_FILE_SUFFIXES", "RunPlan", "plan_batch", "plan_run", "safe_output_stem"]
