from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field

from playlist_report.application.pipeline.columns import missing_column_diagnostics, resolve_columns
from playlist_report.application.pipeline.mapping import (
    OUTPUT_SCHEMA,
    column_widths,
    header_labels,
    map_record,
)
from playlist_report.application.pipeline.read import read_table
from playlist_report.application.pipeline.render import format_grid
from playlist_report.application.pipeline.transform import transform_row
from playlist_report.application.pipeline.write import WRITERS
from playlist_report.infrastructure.observability.logger import NullLogger, RunLogger
from playlist_report.infrastructure.settings import Settings
from playlist_report.models.cells import Grid
from playlist_report.models.errors import PipelineError
from playlist_report.models.records import Diagnostic


@dataclass(frozen=True)
class ConversionResult:
    """Workbook bytes plus what was learned while producing them."""

    content: bytes
    output_format: str
    row_count: int
    absent_columns: tuple[str, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = field(default_factory=tuple)

    def diagnostics_by_field(self) -> dict[str, int]:
        return dict(Counter(diag.field for diag in self.diagnostics if diag.row_number > 0))


class Pipeline:
    """Convert delimited playlist text into a report workbook."""

    def __init__(self, *, settings: Settings | None = None, logger: RunLogger | None = None) -> None:
        self.settings = settings or Settings()
        self.logger = logger if logger is not None else NullLogger()

    def convert(self, text: str) -> ConversionResult:
        logger = self.logger

        table = read_table(text, delimiter=self.settings.delimiter)
        logger.event(
            "table.read",
            message=f"Read {table.row_count} data rows",
            data={"row_count": table.row_count, "column_count": table.column_count},
        )

        columns = resolve_columns(table.headers)
        logger.event(
            "columns.resolved",
            message="Recognized columns resolved",
            data={"present": list(columns.present), "absent": list(columns.absent)},
        )
        column_diagnostics = missing_column_diagnostics(columns)
        for diag in column_diagnostics:
            logger.event(
                "column.missing",
                message=diag.message,
                level=logging.WARNING,
                data={"field": diag.field, "headers": list(table.headers)},
            )

        results = [
            transform_row(row, columns, row_number=row_number)
            for row_number, row in enumerate(table.data_rows, start=1)
        ]
        row_diagnostics = tuple(diag for result in results for diag in result.diagnostics)
        for diag in row_diagnostics:
            logger.event("field.fallback", message=diag.message, level=logging.WARNING, data=diag.as_dict())

        mapped = [map_record(result.record) for result in results]
        logger.event(
            "table.mapped",
            message=f"Mapped {len(mapped)} rows to {len(OUTPUT_SCHEMA)} output columns",
            data={
                "row_count": len(mapped),
                "column_count": len(OUTPUT_SCHEMA),
                "diagnostic_count": len(row_diagnostics),
            },
        )

        grid = format_grid(header_labels(), mapped, font_size=self.settings.font_size)
        content = self.write(grid)
        logger.event(
            "workbook.written",
            message="Workbook serialized",
            data={
                "output_format": self.settings.output_format,
                "byte_count": len(content),
                "row_count": len(mapped),
            },
        )

        return ConversionResult(
            content=content,
            output_format=self.settings.output_format,
            row_count=len(mapped),
            absent_columns=columns.absent,
            diagnostics=column_diagnostics + row_diagnostics,
        )

    def write(self, grid: Grid) -> bytes:
        writer = WRITERS[self.settings.output_format]
        try:
            return writer(grid, widths=column_widths(), sheet_name=self.settings.sheet_name)
        except PipelineError:
            raise
        except Exception as exc:
            raise PipelineError(f"Failed to serialize workbook: {exc}", stage="write") from exc


def convert_text(
    text: str,
    *,
    settings: Settings | None = None,
    logger: RunLogger | None = None,
) -> bytes:
    """Convert delimited text and return the workbook buffer."""

    return Pipeline(settings=settings, logger=logger).convert(text).content


__all__ = ["ConversionResult", "Pipeline", "convert_text"]
