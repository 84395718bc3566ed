from __future__ import annotations

from dataclasses import dataclass
import datetime as dt


# Typed field value after parsing. Text is the fallback for anything that did
# not parse; ``""`` means blank.
FieldValue = dt.date | dt.time | int | str


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A recovered, non-fatal problem found while converting one row."""

    row_number: int  # 1-based data row; 0 for run-level (column) diagnostics
    field: str
    value: str
    message: str

    def as_dict(self) -> dict[str, object]:
        return {
            "row_number": self.row_number,
            "field": self.field,
            "value": self.value,
            "message": self.message,
        }


@dataclass(frozen=True, slots=True)
class ParsedRecord:
    """Typed view of one input row."""

    date: dt.date | str = ""
    time: dt.time | str = ""
    minutes: int | str = ""
    seconds: int | str = ""
    artist: str = ""
    title: str = ""
    album: str = ""
    composer: str = ""
    year: str = ""
    publisher: str = ""
    copyright: str = ""


@dataclass(frozen=True, slots=True)
class TransformResult:
    """A parsed record plus the diagnostics collected while parsing it."""

    record: ParsedRecord
    diagnostics: tuple[Diagnostic, ...] = ()


__all__ = ["Diagnostic", "FieldValue", "ParsedRecord", "TransformResult"]
