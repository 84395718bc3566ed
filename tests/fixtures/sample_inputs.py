from __future__ import annotations

from pathlib import Path

import xlrd

PLAYLIST_HEADER = "Artist;Title Played;Date/Time Played;Duration;Album;Composer;Year;Publisher;Copyright"

PLAYLIST_ROWS = (
    "Abba;Waterloo;4/5/2021 1:02:03 PM;3:45;Waterloo;Andersson;1974;Polar;Ulvaeus",
    "Queen;Bohemian Rhapsody;2021-04-05 13:10:00;1:05:59;A Night at the Opera;Mercury;1975;EMI;Mercury",
    "Phoenix;Andrii Popa;05.04.2021 7:5:3;not-a-duration;Cantafabule;Covaci;1975;Electrecord;Covaci",
)


def sample_text(*rows: str, header: str = PLAYLIST_HEADER) -> str:
    return "\n".join((header, *(rows or PLAYLIST_ROWS))) + "\n"


def sample_csv(tmp_path: Path, *, name: str = "played tracks.csv", text: str | None = None) -> Path:
    path = tmp_path / name
    path.write_text(text if text is not None else sample_text(), encoding="utf-8")
    return path


def open_xls(content: bytes) -> xlrd.book.Book:
    return xlrd.open_workbook(file_contents=content, formatting_info=True)


def number_format(book: xlrd.book.Book, sheet: xlrd.sheet.Sheet, row: int, col: int) -> str:
    xf = book.xf_list[sheet.cell_xf_index(row, col)]
    return book.format_map[xf.format_key].format_str


def font_points(book: xlrd.book.Book, sheet: xlrd.sheet.Sheet, row: int, col: int) -> float:
    xf = book.xf_list[sheet.cell_xf_index(row, col)]
    return book.font_list[xf.font_index].height / 20
