from __future__ import annotations

from pathlib import Path
from typing import get_args

import pytest

from playlist_report.infrastructure.io.run_plan import LOG_FILE_SUFFIXES, plan_batch, plan_run, safe_output_stem
from playlist_report.infrastructure.settings import Settings
from playlist_report.models.errors import InputError
from playlist_report.models.run import RunRequest


@pytest.mark.parametrize(
    "stem, expected",
    [
        ("played tracks", "played_tracks"),
        ("radio-2021.04", "radio_2021_04"),
        ("Raport_Aprilie", "Raport_Aprilie"),
        ("", "converted_data"),
    ],
)
def test_safe_output_stem(stem, expected):
    assert safe_output_stem(stem) == expected


def test_default_output_sits_next_to_input(tmp_path):
    source = tmp_path / "played tracks.csv"
    source.write_text("Artist\n", encoding="utf-8")

    plan = plan_run(RunRequest(input_file=source))

    assert plan.output_path == (tmp_path / "played_tracks.xls").resolve()
    assert plan.logs_path == (tmp_path / "played tracks_report.log").resolve()
    assert plan.input_file == source.resolve()


def test_output_dir_and_ndjson_logs(tmp_path):
    source = tmp_path / "in.csv"
    source.write_text("Artist\n", encoding="utf-8")

    plan = plan_run(
        RunRequest(input_file=source, output_dir=tmp_path / "out", logs_dir=tmp_path / "logs"),
        output_suffix=".xlsx",
        log_format="ndjson",
    )

    assert plan.output_path == (tmp_path / "out" / "in.xlsx").resolve()
    assert plan.logs_path == (tmp_path / "logs" / "in_report_events.ndjson").resolve()


def test_missing_input_is_an_input_error(tmp_path):
    with pytest.raises(InputError, match="not found"):
        plan_run(RunRequest(input_file=tmp_path / "absent.csv"))


def test_directory_input_is_rejected(tmp_path):
    with pytest.raises(InputError, match="directory"):
        plan_run(RunRequest(input_file=tmp_path))


def test_output_suffix_must_match_format(tmp_path):
    source = tmp_path / "in.csv"
    source.write_text("Artist\n", encoding="utf-8")

    with pytest.raises(InputError, match=r"\.xls"):
        plan_run(RunRequest(input_file=source, output_path=tmp_path / "in.xlsx"))


def test_relative_logs_path_lands_in_logs_dir(tmp_path):
    source = tmp_path / "in.csv"
    source.write_text("Artist\n", encoding="utf-8")

    plan = plan_run(RunRequest(input_file=source, logs_dir=tmp_path / "logs", logs_path=Path("run.log")))

    assert plan.logs_path == (tmp_path / "logs" / "run.log").resolve()
    assert plan.logs_dir == (tmp_path / "logs").resolve()


def test_batch_mirrors_input_folders(tmp_path):
    inbox = tmp_path / "inbox"
    inputs = [inbox / "feb" / "played.csv", inbox / "jan" / "played.csv", inbox / "top.csv"]

    items = plan_batch(inputs, input_dir=inbox, output_dir=tmp_path / "out", logs_dir=tmp_path / "logs")

    out = (tmp_path / "out").resolve()
    assert [item.output_path for item in items] == [
        out / "feb" / "played.xls",
        out / "jan" / "played.xls",
        out / "top.xls",
    ]
    assert items[0].logs_dir == (tmp_path / "logs" / "feb").resolve()
    assert all(item.conflict is None for item in items)


def test_batch_flags_names_that_collide_after_sanitizing(tmp_path):
    inbox = tmp_path / "inbox"
    first, second = inbox / "a b.csv", inbox / "a_b.csv"

    items = plan_batch([first, second], input_dir=inbox, output_dir=tmp_path / "out", output_suffix=".xlsx")

    assert items[0].conflict is None
    assert items[1].output_path == items[0].output_path == (tmp_path / "out" / "a_b.xlsx").resolve()
    assert items[1].conflict == first.resolve()
    assert items[1].logs_dir == (tmp_path / "out").resolve()


def test_every_log_format_has_a_log_file_suffix():
    accepted = set(get_args(Settings.model_fields["log_format"].annotation))

    assert set(LOG_FILE_SUFFIXES) == accepted == {"text", "ndjson"}
