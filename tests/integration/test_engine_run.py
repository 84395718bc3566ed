from __future__ import annotations

import json

from openpyxl import load_workbook

from fixtures.sample_inputs import open_xls, sample_csv
from playlist_report.application.engine import Engine
from playlist_report.application.pipeline.pipeline import Pipeline
from playlist_report.infrastructure.settings import Settings
from playlist_report.models.events import RunCompletedPayloadV1
from playlist_report.models.run import RunErrorCode, RunRequest, RunStatus


def _engine(tmp_path, **overrides) -> Engine:
    return Engine(settings=Settings.load(cwd=tmp_path, **overrides))


def _events(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


def test_run_writes_workbook_next_to_input(tmp_path):
    source = sample_csv(tmp_path)

    result = _engine(tmp_path).run(RunRequest(input_file=source))

    assert result.status == RunStatus.SUCCEEDED
    assert result.error is None
    assert result.output_path == (tmp_path / "played_tracks.xls").resolve()
    assert result.processed_file == "played tracks.csv"
    assert result.row_count == 3
    assert result.diagnostic_count == 1
    assert open_xls(result.output_path.read_bytes()).sheet_by_index(0).nrows == 4
    assert (tmp_path / "played tracks_report.log").exists()


def test_run_completed_is_logged_as_ndjson(tmp_path):
    source = sample_csv(tmp_path)
    logs_dir = tmp_path / "logs"

    result = _engine(tmp_path, log_format="ndjson").run(
        RunRequest(input_file=source, output_dir=tmp_path / "out", logs_dir=logs_dir)
    )

    assert result.status == RunStatus.SUCCEEDED
    events = _events(logs_dir / "played tracks_report_events.ndjson")
    names = [event["event"] for event in events]
    assert names[0] == "report.run.started"
    assert names[-1] == "report.run.completed"
    assert "report.field.fallback" in names

    completed = RunCompletedPayloadV1.model_validate(events[-1]["data"])
    assert completed.status == "succeeded"
    assert completed.row_count == 3
    assert completed.diagnostics_by_field == {"duration": 1}
    assert completed.output_file == str((tmp_path / "out" / "played_tracks.xls").resolve())


def test_empty_input_fails_without_output(tmp_path):
    source = sample_csv(tmp_path, name="empty.csv", text="\n")

    result = _engine(tmp_path, log_format="ndjson").run(RunRequest(input_file=source))

    assert result.status == RunStatus.FAILED
    assert result.error is not None
    assert result.error.code == RunErrorCode.EMPTY_INPUT
    assert result.output_path is None
    assert not (tmp_path / "empty.xls").exists()

    completed = _events(tmp_path / "empty_report_events.ndjson")[-1]
    assert completed["event"] == "report.run.completed"
    assert completed["data"]["status"] == "failed"
    assert completed["data"]["error"]["code"] == "empty_input"


def test_missing_input_fails_at_plan_stage(tmp_path):
    result = _engine(tmp_path).run(RunRequest(input_file=tmp_path / "absent.csv"))

    assert result.status == RunStatus.FAILED
    assert result.error.code == RunErrorCode.INPUT_ERROR
    assert result.error.stage == "plan"
    assert result.logs_dir is None


def test_undecodable_input_is_an_input_error(tmp_path):
    source = tmp_path / "latin.csv"
    source.write_bytes("Artist\nMaria Tănase\n".encode("utf-16"))

    result = _engine(tmp_path).run(RunRequest(input_file=source))

    assert result.status == RunStatus.FAILED
    assert result.error.code == RunErrorCode.INPUT_ERROR


def test_xlsx_output_format(tmp_path):
    source = sample_csv(tmp_path)

    result = _engine(tmp_path, output_format="xlsx", sheet_name="Raport").run(RunRequest(input_file=source))

    assert result.output_path.suffix == ".xlsx"
    ws = load_workbook(result.output_path)["Raport"]
    assert ws.max_row == 4
    assert ws["A1"].value == "DATA DIFUZARII"
    assert ws["I2"].value == "Abba"


def test_unexpected_error_still_completes_the_run(tmp_path, monkeypatch):
    source = sample_csv(tmp_path)

    def explode(self, text):
        raise RuntimeError("writer exploded")

    monkeypatch.setattr(Pipeline, "convert", explode)

    result = _engine(tmp_path, log_format="ndjson").run(RunRequest(input_file=source))

    assert result.status == RunStatus.FAILED
    assert result.error.code == RunErrorCode.UNKNOWN_ERROR
    assert result.error.message == "writer exploded"
    assert result.output_path is None
    assert not (tmp_path / "played_tracks.xls").exists()

    events = _events(tmp_path / "played tracks_report_events.ndjson")
    assert events[-1]["event"] == "report.run.completed"
    assert events[-1]["data"]["error"] == {"code": "unknown_error", "stage": None, "message": "writer exploded"}
    assert any(event.get("error", {}).get("type") == "RuntimeError" for event in events)
