from playlist_report.models.cells import Cell, CellStyle, Grid, NumberCell, TextCell
from playlist_report.models.records import Diagnostic, FieldValue, ParsedRecord, TransformResult
from playlist_report.models.table import ColumnIndex, RawTable

__all__ = [
    "Cell",
    "CellStyle",
    "ColumnIndex",
    "Diagnostic",
    "FieldValue",
    "Grid",
    "NumberCell",
    "ParsedRecord",
    "RawTable",
    "TextCell",
    "TransformResult",
]
