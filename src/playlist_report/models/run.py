"""Request and result types for converting one playlist file."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from playlist_report.models.errors import EmptyInputError, InputError, PipelineError


class RunStatus(str, Enum):
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class RunErrorCode(str, Enum):
    INPUT_ERROR = "input_error"
    EMPTY_INPUT = "empty_input"
    PIPELINE_ERROR = "pipeline_error"
    UNKNOWN_ERROR = "unknown_error"


@dataclass(frozen=True)
class RunRequest:
    """One input file and where its workbook and log should go.

    ``output_path`` wins over ``output_dir``; with neither, the workbook lands
    beside the input. ``logs_path`` wins over ``logs_dir``, which defaults to
    the output directory. Relative paths are resolved by :func:`plan_run`.
    """

    input_file: Path
    output_dir: Path | None = None
    output_path: Path | None = None
    logs_dir: Path | None = None
    logs_path: Path | None = None


@dataclass(frozen=True)
class RunError:
    code: RunErrorCode
    stage: str | None
    message: str

    @classmethod
    def from_exception(cls, exc: BaseException, *, stage: str | None = None) -> "RunError":
        if isinstance(exc, EmptyInputError):
            code = RunErrorCode.EMPTY_INPUT
        elif isinstance(exc, InputError):
            code = RunErrorCode.INPUT_ERROR
        elif isinstance(exc, PipelineError):
            code = RunErrorCode.PIPELINE_ERROR
        else:
            code = RunErrorCode.UNKNOWN_ERROR
        return cls(
            code=code,
            stage=stage or getattr(exc, "stage", None),
            message=str(exc) or type(exc).__name__,
        )

    def as_payload(self) -> dict[str, Any]:
        return {"code": self.code.value, "stage": self.stage, "message": self.message}


@dataclass(frozen=True)
class RunResult:
    status: RunStatus
    error: RunError | None
    output_path: Path | None
    logs_dir: Path | None
    processed_file: str | None
    row_count: int = 0
    diagnostic_count: int = 0
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == RunStatus.SUCCEEDED


__all__ = ["RunError", "RunErrorCode", "RunRequest", "RunResult", "RunStatus"]
