"""Fixed output schema and row mapping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from playlist_report.models.records import FieldValue, ParsedRecord


@dataclass(frozen=True, slots=True)
class OutputColumn:
    """One output column: header label, bound ``ParsedRecord`` field, width in characters."""

    label: str
    field: str | None = None
    width: int = 20


OUTPUT_SCHEMA: tuple[OutputColumn, ...] = (
    OutputColumn("DATA DIFUZARII", "date", 14),
    OutputColumn("NUMELE EMISIUNII", None, 22),
    OutputColumn("ORA DIFUZARII", "time", 14),
    OutputColumn("MINUTE DIFUZATE", "minutes", 16),
    OutputColumn("SECUNDE DIFUZATE", "seconds", 17),
    OutputColumn("TITLUL PIESEI", "title", 35),
    OutputColumn("AUTOR MUZICA", "copyright", 28),
    OutputColumn("AUTOR TEXT", "composer", 28),
    OutputColumn("ARTIST", "artist", 28),
    OutputColumn("ORCHESTRA FORMATIE GRUP", None, 25),
    OutputColumn("NR. DE ARTISTI", None, 14),
    OutputColumn("ALBUM", "album", 30),
    OutputColumn("NUMAR CATALOG", None, 15),
    OutputColumn("LABEL", None, 20),
    OutputColumn("PRODUCATOR", "publisher", 25),
    OutputColumn("TARA", None, 10),
    OutputColumn("ANUL INREGISTRARII", "year", 20),
    OutputColumn("TIPUL INREGISTRARII", None, 22),
)


def header_labels(schema: Sequence[OutputColumn] = OUTPUT_SCHEMA) -> tuple[str, ...]:
    return tuple(column.label for column in schema)


def column_widths(schema: Sequence[OutputColumn] = OUTPUT_SCHEMA) -> tuple[int, ...]:
    return tuple(column.width for column in schema)


def map_record(record: ParsedRecord, schema: Sequence[OutputColumn] = OUTPUT_SCHEMA) -> tuple[FieldValue, ...]:
    """Lay ``record`` out in schema order; unbound columns are ``""``."""

    return tuple(
        getattr(record, column.field) if column.field is not None else ""
        for column in schema
    )


__all__ = ["OUTPUT_SCHEMA", "OutputColumn", "column_widths", "header_labels", "map_record"]
