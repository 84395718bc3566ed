"""Text and NDJSON renderings of :class:`RunLogger` records."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

_MAX_VALUE_LEN = 120


def _as_dict(record: logging.LogRecord, formatter: logging.Formatter) -> dict[str, Any]:
    created = datetime.fromtimestamp(record.created, tz=timezone.utc)
    out: dict[str, Any] = {
        "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        "level": record.levelname.lower(),
        "run_id": record.run_id,
        "event": record.event,
        "message": record.getMessage(),
    }

    data = getattr(record, "data", None)
    if data:
        out["data"] = data

    if record.exc_info:
        exc = record.exc_info[1]
        out["error"] = {
            "type": type(exc).__name__,
            "message": str(exc),
            "stack_trace": formatter.formatException(record.exc_info),
        }
    return out


class NdjsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        return json.dumps(_as_dict(record, self), ensure_ascii=False, default=str, separators=(",", ":"))


class TextFormatter(logging.Formatter):
    """``[timestamp] LEVEL event: message (key=value, ...)``"""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        fields = _as_dict(record, self)
        line = f"[{fields['timestamp']}] {fields['level'].upper()} {fields['event']}"
        if fields["message"] != fields["event"]:
            line += f": {fields['message']}"

        if "data" in fields:
            pairs = []
            for key, value in sorted(fields["data"].items()):
                text = str(value)
                if len(text) > _MAX_VALUE_LEN:
                    text = text[: _MAX_VALUE_LEN - 3] + "..."
                pairs.append(f"{key}={text}")
            line += " (" + ", ".join(pairs) + ")"

        if "error" in fields:
            line += "\n" + fields["error"]["stack_trace"]
        return line


__all__ = ["NdjsonFormatter", "TextFormatter"]
