from __future__ import annotations

from typing import Mapping, Sequence

from playlist_report.models.records import Diagnostic
from playlist_report.models.table import ColumnIndex

# Recognized input columns keyed by field; candidates are tried in order.
RECOGNIZED_COLUMNS: Mapping[str, tuple[str, ...]] = {
    "date_time": ("date/time played",),
    "duration": ("duration",),
    "artist": ("artist",),
    "title": ("title played", "title"),
    "album": ("album",),
    "composer": ("composer",),
    "year": ("year",),
    "publisher": ("publisher",),
    "copyright": ("copyright",),
}


def header_positions(headers: Sequence[str]) -> dict[str, int]:
    """Map lower-cased header labels to positions; the left-most duplicate wins."""

    positions: dict[str, int] = {}
    for idx, header in enumerate(headers):
        key = header.strip().lower()
        if key:
            positions.setdefault(key, idx)
    return positions


def resolve_columns(headers: Sequence[str]) -> ColumnIndex:
    positions = header_positions(headers)
    fields: dict[str, int | None] = {}
    for field, candidates in RECOGNIZED_COLUMNS.items():
        fields[field] = next((positions[name] for name in candidates if name in positions), None)
    return ColumnIndex(positions=positions, fields=fields)


def missing_column_diagnostics(columns: ColumnIndex) -> tuple[Diagnostic, ...]:
    return tuple(
        Diagnostic(
            row_number=0,
            field=field,
            value="",
            message=(
                f"Column {' / '.join(repr(name) for name in RECOGNIZED_COLUMNS[field])} not found; "
                "output cells stay blank"
            ),
        )
        for field in columns.absent
    )


__all__ = ["RECOGNIZED_COLUMNS", "header_positions", "missing_column_diagnostics", "resolve_columns"]
