from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from playlist_report.application.pipeline.pipeline import ConversionResult, Pipeline
from playlist_report.infrastructure.io.run_plan import RunPlan, plan_run
from playlist_report.infrastructure.io.source import read_source_text, write_output
from playlist_report.infrastructure.observability.context import open_run_logger
from playlist_report.infrastructure.observability.logger import RunLogger
from playlist_report.infrastructure.settings import Settings
from playlist_report.models.errors import InputError, ReportError
from playlist_report.models.run import RunError, RunRequest, RunResult, RunStatus


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Engine:
    """High-level orchestrator for a single playlist conversion."""

    def __init__(self, *, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()

    def convert(self, text: str, *, logger: RunLogger | None = None) -> ConversionResult:
        """Convert in-memory text; ``EmptyInputError`` propagates to the caller."""

        return Pipeline(settings=self.settings, logger=logger).convert(text)

    def run(self, request: RunRequest, *, logger: RunLogger | None = None) -> RunResult:
        """Convert ``request.input_file`` and write the workbook.

        Failures are returned as a FAILED :class:`RunResult`, never raised, and
        ``report.run.completed`` is the last event of every planned run.
        """

        started_at = _utc_now()
        try:
            plan = plan_run(
                request,
                output_suffix=self.settings.output_suffix,
                log_format=self.settings.log_format,
            )
        except InputError as exc:
            return RunResult(
                status=RunStatus.FAILED,
                error=RunError.from_exception(exc, stage="plan"),
                output_path=None,
                logs_dir=None,
                processed_file=request.input_file.name,
                started_at=started_at,
                completed_at=_utc_now(),
            )

        if logger is not None:
            return self._run_planned(plan, logger, started_at)

        with open_run_logger(
            log_format=self.settings.log_format,
            log_level=self.settings.log_level,
            log_file=plan.logs_path,
        ) as run_logger:
            return self._run_planned(plan, run_logger, started_at)

    def _run_planned(self, plan: RunPlan, logger: RunLogger, started_at: datetime) -> RunResult:
        logger.event(
            "settings.effective",
            message="Effective converter settings",
            level=logging.DEBUG,
            data={"settings": self.settings.model_dump(mode="json")},
        )
        logger.event("run.started", message="Run started", data={"input_file": str(plan.input_file)})
        logger.event(
            "run.planned",
            message="Run planned",
            data={
                "output_file": str(plan.output_path),
                "output_dir": str(plan.output_dir),
                "logs_file": str(plan.logs_path),
                "logs_dir": str(plan.logs_dir),
            },
        )

        conversion: ConversionResult | None = None
        error: RunError | None = None
        try:
            text = read_source_text(plan.input_file, encoding=self.settings.input_encoding)
            conversion = self.convert(text, logger=logger)
            write_output(plan.output_path, conversion.content)
        except ReportError as exc:
            error = RunError.from_exception(exc)
            logger.exception("Run failed", exc_info=exc)
        except Exception as exc:
            error = RunError.from_exception(exc)
            logger.exception("Run failed unexpectedly", exc_info=exc)

        completed_at = _utc_now()
        result = RunResult(
            status=RunStatus.FAILED if error is not None else RunStatus.SUCCEEDED,
            error=error,
            output_path=plan.output_path if error is None else None,
            logs_dir=plan.logs_dir,
            processed_file=plan.input_file.name,
            row_count=conversion.row_count if conversion is not None else 0,
            diagnostic_count=len(conversion.diagnostics) if conversion is not None else 0,
            started_at=started_at,
            completed_at=completed_at,
        )
        logger.event("run.completed", data=self._completion_payload(plan, result, conversion))
        return result

    @staticmethod
    def _completion_payload(
        plan: RunPlan,
        result: RunResult,
        conversion: ConversionResult | None,
    ) -> dict[str, Any]:
        return {
            "status": result.status.value,
            "started_at": result.started_at,
            "completed_at": result.completed_at,
            "duration_ms": max(0, int((result.completed_at - result.started_at).total_seconds() * 1000)),
            "input_file": str(plan.input_file),
            "output_file": str(result.output_path) if result.output_path is not None else None,
            "row_count": result.row_count,
            "diagnostic_count": result.diagnostic_count,
            "diagnostics_by_field": conversion.diagnostics_by_field() if conversion is not None else {},
            "absent_columns": list(conversion.absent_columns) if conversion is not None else [],
            "error": result.error.as_payload() if result.error is not None else None,
        }


__all__ = ["Engine"]
