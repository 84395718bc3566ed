"""Turn mapped values into typed, styled output cells."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Iterable, Sequence

from playlist_report.models.cells import Cell, CellStyle, Grid, NumberCell, TextCell
from playlist_report.models.records import FieldValue

DATE_FORMAT = "mm/dd/yyyy"
TIME_FORMAT = "hh:mm:ss"
INTEGER_FORMAT = "0"

# 1900 date system, including the historical 1900-02-29 slot.
SERIAL_EPOCH = date(1899, 12, 30)
SECONDS_PER_DAY = 86_400


def date_serial(value: date) -> int:
    return (value - SERIAL_EPOCH).days


def time_serial(value: time) -> float:
    return (value.hour * 3600 + value.minute * 60 + value.second) / SECONDS_PER_DAY


def format_value(value: FieldValue, style: CellStyle | None = None) -> Cell:
    if isinstance(value, datetime):
        raise TypeError("datetime values are not part of the output schema; split date and time first")
    if isinstance(value, date):
        return NumberCell(date_serial(value), DATE_FORMAT, style)
    if isinstance(value, time):
        return NumberCell(time_serial(value), TIME_FORMAT, style)
    if isinstance(value, int) and not isinstance(value, bool):
        return NumberCell(value, INTEGER_FORMAT, style)
    return TextCell(str(value), style)


def format_grid(
    headers: Sequence[str],
    rows: Iterable[Sequence[FieldValue]],
    *,
    font_size: int = 10,
) -> Grid:
    """Build the output grid; every cell, headers included, carries the same style."""

    style = CellStyle(font_size=font_size)
    grid: list[tuple[Cell, ...]] = [tuple(TextCell(label, style) for label in headers)]
    grid.extend(tuple(format_value(value, style) for value in row) for row in rows)
    return tuple(grid)


__all__ = [
    "DATE_FORMAT",
    "INTEGER_FORMAT",
    "SERIAL_EPOCH",
    "TIME_FORMAT",
    "date_serial",
    "format_grid",
    "format_value",
    "time_serial",
]
