from __future__ import annotations

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from playlist_report.infrastructure.observability.formatters import NdjsonFormatter, TextFormatter
from playlist_report.infrastructure.observability.logger import RunLogger


@contextmanager
def open_run_logger(
    *,
    log_format: str = "text",
    log_level: int = logging.INFO,
    log_file: Path | None = None,
    console: bool = True,
) -> Iterator[RunLogger]:
    """Yield a :class:`RunLogger` writing to stderr and/or ``log_file``.

    The file sink never filters below INFO, so ``report.run.completed`` lands
    in the log file even when the console runs with ``--quiet``.
    """

    formatter = NdjsonFormatter() if log_format == "ndjson" else TextFormatter()

    handlers: list[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))
        handlers[-1].setLevel(log_level)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
        handlers[-1].setLevel(min(log_level, logging.INFO))

    run_id = uuid.uuid4().hex
    base = logging.getLogger(f"playlist_report.run.{run_id}")
    base.propagate = False
    base.setLevel(min((h.level for h in handlers), default=log_level))
    for handler in handlers:
        handler.setFormatter(formatter)
        base.addHandler(handler)

    try:
        yield RunLogger(base, run_id=run_id)
    finally:
        for handler in handlers:
            base.removeHandler(handler)
            handler.close()
        # Per-run loggers would otherwise accumulate in the logging manager.
        logging.Logger.manager.loggerDict.pop(base.name, None)


__all__ = ["open_run_logger"]
