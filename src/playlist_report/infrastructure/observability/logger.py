"""Run-scoped logger that emits validated ``report.*`` events."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from playlist_report.models.events import DEFAULT_EVENT, REPORT_EVENT_SCHEMAS, REPORT_NAMESPACE

EVENT_PREFIX = f"{REPORT_NAMESPACE}."


def event_name(name: str) -> str:
    """``"table.read"`` -> ``"report.table.read"``; already-prefixed names pass through."""

    name = name.strip().strip(".")
    return name if name.startswith(EVENT_PREFIX) else EVENT_PREFIX + name


def validate_event(event: str, data: Mapping[str, Any]) -> dict[str, Any]:
    if event not in REPORT_EVENT_SCHEMAS:
        raise ValueError(f"Unknown report event '{event}'")

    schema = REPORT_EVENT_SCHEMAS[event]
    if schema is None:
        return dict(data)

    try:
        model = schema.model_validate(dict(data), strict=True)
    except ValidationError as exc:
        raise ValueError(f"Invalid payload for event '{event}': {exc}") from exc
    # Explicit nulls stay in the payload so NDJSON lines keep a stable shape.
    return model.model_dump(mode="python")


class RunLogger(logging.LoggerAdapter):
    """Stamps every record with ``run_id`` and an ``event`` name.

    Plain log calls are tagged ``report.log``; :meth:`event` emits a registered
    report event whose ``data`` has been checked against its payload model.
    """

    def __init__(self, logger: logging.Logger, *, run_id: str | None = None) -> None:
        super().__init__(logger, {"run_id": run_id or uuid.uuid4().hex})

    @property
    def run_id(self) -> str:
        return self.extra["run_id"]

    def process(self, msg: Any, kwargs: dict[str, Any]) -> tuple[Any, dict[str, Any]]:
        kwargs["extra"] = {
            "event": EVENT_PREFIX + DEFAULT_EVENT,
            **(kwargs.get("extra") or {}),
            "run_id": self.run_id,
        }
        return msg, kwargs

    def event(
        self,
        name: str,
        *,
        message: str | None = None,
        level: int = logging.INFO,
        data: Mapping[str, Any] | None = None,
    ) -> None:
        if not self.isEnabledFor(level):
            return

        event = event_name(name)
        payload = validate_event(event, data or {})
        self.log(level, message or event, extra={"event": event, "data": payload})


class NullLogger(RunLogger):
    """Discards everything; the default when a pipeline is used as a library."""

    def __init__(self) -> None:
        sink = logging.Logger("playlist_report.null")
        sink.disabled = True
        super().__init__(sink, run_id="null")

    def __bool__(self) -> bool:
        return False


__all__ = ["EVENT_PREFIX", "NullLogger", "RunLogger", "event_name", "validate_event"]
