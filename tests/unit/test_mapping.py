from __future__ import annotations

from datetime import date, time

from playlist_report.application.pipeline.mapping import (
    OUTPUT_SCHEMA,
    column_widths,
    header_labels,
    map_record,
)
from playlist_report.models.records import ParsedRecord

EXPECTED_LABELS = (
    "DATA DIFUZARII",
    "NUMELE EMISIUNII",
    "ORA DIFUZARII",
    "MINUTE DIFUZATE",
    "SECUNDE DIFUZATE",
    "TITLUL PIESEI",
    "AUTOR MUZICA",
    "AUTOR TEXT",
    "ARTIST",
    "ORCHESTRA FORMATIE GRUP",
    "NR. DE ARTISTI",
    "ALBUM",
    "NUMAR CATALOG",
    "LABEL",
    "PRODUCATOR",
    "TARA",
    "ANUL INREGISTRARII",
    "TIPUL INREGISTRARII",
)


def test_schema_has_eighteen_fixed_labels():
    assert header_labels() == EXPECTED_LABELS
    assert len(column_widths()) == 18
    assert all(width > 0 for width in column_widths())


def test_schema_bindings_by_one_based_position():
    bindings = {idx: column.field for idx, column in enumerate(OUTPUT_SCHEMA, start=1) if column.field}

    assert bindings == {
        1: "date",
        3: "time",
        4: "minutes",
        5: "seconds",
        6: "title",
        7: "copyright",
        8: "composer",
        9: "artist",
        12: "album",
        15: "publisher",
        17: "year",
    }


def test_map_record_places_fields_and_blanks_unbound_columns():
    record = ParsedRecord(
        date=date(2021, 4, 5),
        time=time(13, 2, 3),
        minutes=3,
        seconds=45,
        artist="Abba",
        title="Waterloo",
        album="Waterloo",
        composer="Andersson",
        year="1974",
        publisher="Polar",
        copyright="Ulvaeus",
    )

    row = map_record(record)

    assert len(row) == 18
    assert row[0] == date(2021, 4, 5)
    assert row[2] == time(13, 2, 3)
    assert row[3:9] == (3, 45, "Waterloo", "Ulvaeus", "Andersson", "Abba")
    assert row[11] == "Waterloo"
    assert row[14] == "Polar"
    assert row[16] == "1974"
    assert [row[i] for i in (1, 9, 10, 12, 13, 15, 17)] == [""] * 7


def test_map_record_of_empty_record_is_all_blank():
    assert map_record(ParsedRecord()) == ("",) * 18
