"""Split raw delimited text into a :class:`RawTable`."""

from __future__ import annotations

import csv
import io

from playlist_report.models.errors import EmptyInputError, InputError
from playlist_report.models.table import RawTable

_BOM = "\ufeff"


def read_table(text: str, *, delimiter: str = ";") -> RawTable:
    """Return the trimmed cells of every non-blank line; the first row is the header.

    Raises :class:`EmptyInputError` when nothing is left, which is the only
    fatal condition of a conversion.
    """

    if text.startswith(_BOM):
        text = text[len(_BOM):]

    try:
        reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
        rows = tuple(tuple(cell.strip() for cell in row) for row in reader if row)
    except csv.Error as exc:
        raise InputError(f"Malformed delimited text: {exc}") from exc

    if not rows:
        raise EmptyInputError("Input text is empty or contains no header row.")

    return RawTable(rows=rows)


__all__ = ["read_table"]
