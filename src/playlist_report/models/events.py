"""Event payload schemas and schema registry for converter logging.

Payload models are strict:
- ``extra="forbid"`` to prevent accidental schema drift
- runtime validation uses ``model_validate(..., strict=True)``
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

REPORT_NAMESPACE = "report"

DEFAULT_EVENT = "log"  # fallback event for plain log lines

PayloadModel: TypeAlias = type[BaseModel] | None

NonNegativeInt = Annotated[int, Field(ge=0)]


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class StrictPayloadV1(StrictModel):
    schema_version: Literal[1] = 1


class RunStartedPayloadV1(StrictPayloadV1):
    input_file: str | None


class RunPlannedPayloadV1(StrictPayloadV1):
    output_file: str
    output_dir: str
    logs_file: str | None = None
    logs_dir: str | None = None


class TableReadPayloadV1(StrictPayloadV1):
    row_count: NonNegativeInt
    column_count: NonNegativeInt


class ColumnsResolvedPayloadV1(StrictPayloadV1):
    present: list[str]
    absent: list[str]


class ColumnMissingPayloadV1(StrictPayloadV1):
    field: str
    headers: list[str]


class FieldFallbackPayloadV1(StrictPayloadV1):
    row_number: NonNegativeInt
    field: str
    value: str
    message: str


class TableMappedPayloadV1(StrictPayloadV1):
    row_count: NonNegativeInt
    column_count: NonNegativeInt
    diagnostic_count: NonNegativeInt


class WorkbookWrittenPayloadV1(StrictPayloadV1):
    output_format: Literal["xls", "xlsx"]
    byte_count: NonNegativeInt
    row_count: NonNegativeInt


class RunErrorPayloadV1(StrictModel):
    code: str
    stage: str | None = None
    message: str


class RunCompletedPayloadV1(StrictPayloadV1):
    status: Literal["succeeded", "failed"]
    started_at: datetime
    completed_at: datetime
    duration_ms: NonNegativeInt
    input_file: str | None = None
    output_file: str | None = None
    row_count: NonNegativeInt = 0
    diagnostic_count: NonNegativeInt = 0
    diagnostics_by_field: dict[str, NonNegativeInt] = Field(default_factory=dict)
    absent_columns: list[str] = Field(default_factory=list)
    error: RunErrorPayloadV1 | None = None


REPORT_EVENT_SCHEMAS: dict[str, PayloadModel] = {
    f"{REPORT_NAMESPACE}.run.started": RunStartedPayloadV1,
    f"{REPORT_NAMESPACE}.run.planned": RunPlannedPayloadV1,
    f"{REPORT_NAMESPACE}.run.completed": RunCompletedPayloadV1,
    f"{REPORT_NAMESPACE}.table.read": TableReadPayloadV1,
    f"{REPORT_NAMESPACE}.columns.resolved": ColumnsResolvedPayloadV1,
    f"{REPORT_NAMESPACE}.column.missing": ColumnMissingPayloadV1,
    f"{REPORT_NAMESPACE}.field.fallback": FieldFallbackPayloadV1,
    f"{REPORT_NAMESPACE}.table.mapped": TableMappedPayloadV1,
    f"{REPORT_NAMESPACE}.workbook.written": WorkbookWrittenPayloadV1,
    f"{REPORT_NAMESPACE}.settings.effective": None,
}


__all__ = [
    "DEFAULT_EVENT",
    "REPORT_EVENT_SCHEMAS",
    "REPORT_NAMESPACE",
    "ColumnMissingPayloadV1",
    "ColumnsResolvedPayloadV1",
    "FieldFallbackPayloadV1",
    "RunCompletedPayloadV1",
    "RunErrorPayloadV1",
    "RunPlannedPayloadV1",
    "RunStartedPayloadV1",
    "TableMappedPayloadV1",
    "TableReadPayloadV1",
    "WorkbookWrittenPayloadV1",
]
