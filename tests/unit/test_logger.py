from __future__ import annotations

import json
import logging

import pytest

from playlist_report.infrastructure.observability.context import open_run_logger
from playlist_report.infrastructure.observability.logger import NullLogger, RunLogger, event_name


class _Capture(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def captured():
    handler = _Capture()
    base = logging.getLogger("playlist_report.tests.logger")
    base.setLevel(logging.DEBUG)
    base.propagate = False
    base.addHandler(handler)
    yield RunLogger(base, run_id="run-1"), handler
    base.removeHandler(handler)


@pytest.mark.parametrize(
    "name, expected",
    [("table.read", "report.table.read"), ("report.table.read", "report.table.read"), (".run.started.", "report.run.started")],
)
def test_event_name(name, expected):
    assert event_name(name) == expected


def test_event_is_prefixed_and_validated(captured):
    logger, handler = captured

    logger.event("table.read", data={"row_count": 3, "column_count": 9})

    record = handler.records[-1]
    assert record.event == "report.table.read"
    assert record.run_id == "run-1"
    assert record.data == {"schema_version": 1, "row_count": 3, "column_count": 9}


def test_unknown_report_event_is_rejected(captured):
    logger, _ = captured

    with pytest.raises(ValueError, match="Unknown report event"):
        logger.event("table.exploded", data={})


def test_payload_extra_keys_are_rejected(captured):
    logger, _ = captured

    with pytest.raises(ValueError, match="Invalid payload"):
        logger.event("table.read", data={"row_count": 1, "column_count": 1, "sheet": "x"})


def test_plain_log_lines_get_default_event(captured):
    logger, handler = captured

    logger.info("hello")

    assert handler.records[-1].event == "report.log"
    assert handler.records[-1].run_id == "run-1"


def test_null_logger_is_falsy_and_silent():
    logger = NullLogger()

    assert not logger
    logger.event("table.exploded", data={})


def test_ndjson_log_file(tmp_path):
    log_file = tmp_path / "logs" / "run.ndjson"

    with open_run_logger(log_format="ndjson", console=False, log_file=log_file) as logger:
        logger.event("run.started", data={"input_file": "in.csv"})
        run_id = logger.run_id

    lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert [line["event"] for line in lines] == ["report.run.started"]
    assert lines[0]["data"] == {"schema_version": 1, "input_file": "in.csv"}
    assert lines[0]["run_id"] == run_id
    assert f"playlist_report.run.{run_id}" not in logging.Logger.manager.loggerDict


def test_log_file_keeps_info_events_when_console_is_quiet(tmp_path):
    log_file = tmp_path / "run.log"

    with open_run_logger(log_level=logging.WARNING, console=False, log_file=log_file) as logger:
        logger.event("table.read", data={"row_count": 2, "column_count": 4})
        logger.debug("not written")

    text = log_file.read_text(encoding="utf-8")
    assert "INFO report.table.read" in text
    assert "column_count=4, row_count=2, schema_version=1" in text
    assert "not written" not in text


def test_failures_carry_the_exception(tmp_path):
    log_file = tmp_path / "run.ndjson"

    with open_run_logger(log_format="ndjson", console=False, log_file=log_file) as logger:
        try:
            raise RuntimeError("boom")
        except RuntimeError as exc:
            logger.exception("Run failed", exc_info=exc)

    line = json.loads(log_file.read_text(encoding="utf-8"))
    assert line["event"] == "report.log"
    assert line["level"] == "error"
    assert line["error"]["type"] == "RuntimeError"
    assert line["error"]["message"] == "boom"
    assert "Traceback" in line["error"]["stack_trace"]
