"""Output cell variants.

Cells are immutable: each formatting stage builds new cells instead of
patching type/format attributes in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class CellStyle:
    """Visual attributes shared by every cell in the output grid."""

    font_size: int = 10


@dataclass(frozen=True, slots=True)
class TextCell:
    value: str = ""
    style: CellStyle | None = None

    @property
    def is_blank(self) -> bool:
        return self.value == ""


@dataclass(frozen=True, slots=True)
class NumberCell:
    value: float | int
    number_format: str = "General"
    style: CellStyle | None = None

    @property
    def is_blank(self) -> bool:
        return False


Cell: TypeAlias = TextCell | NumberCell
Grid: TypeAlias = tuple[tuple[Cell, ...], ...]


__all__ = ["Cell", "CellStyle", "Grid", "NumberCell", "TextCell"]
