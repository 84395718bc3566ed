from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True, slots=True)
class RawTable:
    """Delimited text split into trimmed string cells; row 0 is the header row.

    Rows may be shorter than the header; missing trailing cells read as ``""``.
    """

    rows: tuple[tuple[str, ...], ...]

    def __post_init__(self) -> None:
        if not self.rows:
            raise ValueError("RawTable requires at least a header row.")

    @property
    def headers(self) -> tuple[str, ...]:
        return self.rows[0]

    @property
    def data_rows(self) -> tuple[tuple[str, ...], ...]:
        return self.rows[1:]

    @property
    def row_count(self) -> int:
        return len(self.rows) - 1

    @property
    def column_count(self) -> int:
        return max((len(row) for row in self.rows), default=0)


@dataclass(frozen=True, slots=True)
class ColumnIndex:
    """Read-only header lookup computed once per run.

    ``positions`` maps every lower-cased header label to its column position.
    ``fields`` maps each recognized field key to a position, or ``None`` when
    the column is absent from the input.
    """

    positions: Mapping[str, int]
    fields: Mapping[str, int | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "positions", MappingProxyType(dict(self.positions)))
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def position(self, key: str) -> int | None:
        return self.fields.get(key)

    def is_present(self, key: str) -> bool:
        return self.fields.get(key) is not None

    def cell(self, row: tuple[str, ...], key: str) -> str:
        """Return the cell for ``key`` in ``row`` (``""`` when absent or short)."""

        idx = self.fields.get(key)
        if idx is None or idx >= len(row):
            return ""
        return row[idx]

    @property
    def absent(self) -> tuple[str, ...]:
        return tuple(key for key, idx in self.fields.items() if idx is None)

    @property
    def present(self) -> tuple[str, ...]:
        return tuple(key for key, idx in self.fields.items() if idx is not None)


__all__ = ["ColumnIndex", "RawTable"]
