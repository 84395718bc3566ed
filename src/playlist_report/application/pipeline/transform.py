"""Per-row parsing of the date/time and duration columns.

Date and time parsing is table-driven: each pattern table is an ordered tuple
tried front to back, and the first pattern that yields a valid value wins.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, time
from typing import Sequence

from playlist_report.models.records import Diagnostic, ParsedRecord, TransformResult
from playlist_report.models.table import ColumnIndex

# Guards against mis-parses that land on a near-epoch year.
MIN_PLAUSIBLE_YEAR = 1900

_DIGITS = re.compile(r"[0-9]+")
_LOOSE_TIME = re.compile(r"([0-9]{1,2}):([0-9]{1,2}):([0-9]{1,2})")


@dataclass(frozen=True, slots=True)
class DatePattern:
    label: str
    regex: re.Pattern[str]

    def parse(self, text: str) -> date | None:
        match = self.regex.fullmatch(text)
        if match is None:
            return None
        try:
            return date(int(match["year"]), int(match["month"]), int(match["day"]))
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class TimePattern:
    label: str
    regex: re.Pattern[str]
    twelve_hour: bool = False

    def parse(self, text: str) -> time | None:
        match = self.regex.fullmatch(text)
        if match is None:
            return None

        groups = match.groupdict()
        hour = int(groups["hour"])
        minute = int(groups["minute"])
        second = int(groups.get("second") or 0)

        if self.twelve_hour:
            if not 1 <= hour <= 12:
                return None
            hour = hour % 12 + (12 if groups["meridiem"].upper() == "PM" else 0)

        try:
            return time(hour, minute, second)
        except ValueError:
            return None


_MERIDIEM = r" (?P<meridiem>[AaPp][Mm])"

DATE_PATTERNS: tuple[DatePattern, ...] = (
    DatePattern("M/d/yyyy", re.compile(r"(?P<month>[0-9]{1,2})/(?P<day>[0-9]{1,2})/(?P<year>[0-9]{4})")),
    DatePattern("MM/dd/yyyy", re.compile(r"(?P<month>[0-9]{2})/(?P<day>[0-9]{2})/(?P<year>[0-9]{4})")),
    DatePattern("yyyy-MM-dd", re.compile(r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})")),
    DatePattern("dd.MM.yyyy", re.compile(r"(?P<day>[0-9]{2})\.(?P<month>[0-9]{2})\.(?P<year>[0-9]{4})")),
    DatePattern("d.M.yyyy", re.compile(r"(?P<day>[0-9]{1,2})\.(?P<month>[0-9]{1,2})\.(?P<year>[0-9]{4})")),
)

TIME_PATTERNS: tuple[TimePattern, ...] = (
    TimePattern(
        "h:mm:ss a",
        re.compile(r"(?P<hour>[0-9]{1,2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})" + _MERIDIEM),
        twelve_hour=True,
    ),
    TimePattern(
        "hh:mm:ss a",
        re.compile(r"(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})" + _MERIDIEM),
        twelve_hour=True,
    ),
    TimePattern("H:mm:ss", re.compile(r"(?P<hour>[0-9]{1,2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})")),
    TimePattern("HH:mm:ss", re.compile(r"(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})")),
    TimePattern(
        "h:mm a",
        re.compile(r"(?P<hour>[0-9]{1,2}):(?P<minute>[0-9]{2})" + _MERIDIEM),
        twelve_hour=True,
    ),
    TimePattern("H:mm", re.compile(r"(?P<hour>[0-9]{1,2}):(?P<minute>[0-9]{2})")),
)


def split_date_time(raw: str) -> tuple[str, str]:
    """Split at the first space into ``(date_text, time_text)``."""

    pos = raw.find(" ")
    if pos < 0:
        return raw, ""
    return raw[:pos], raw[pos + 1:].strip()


def parse_date(text: str, patterns: Sequence[DatePattern] = DATE_PATTERNS) -> date | None:
    for pattern in patterns:
        parsed = pattern.parse(text)
        if parsed is not None and parsed.year > MIN_PLAUSIBLE_YEAR:
            return parsed
    return None


def parse_loose_time(text: str) -> time | None:
    """Last resort for ``H:M:S`` shapes the strict patterns reject (e.g. ``7:5:3``)."""

    match = _LOOSE_TIME.fullmatch(text)
    if match is None:
        return None
    hour, minute, second = (int(part) for part in text.split(":"))
    try:
        return time(hour, minute, second)
    except ValueError:
        return None


def parse_time(text: str, patterns: Sequence[TimePattern] = TIME_PATTERNS) -> time | None:
    for pattern in patterns:
        parsed = pattern.parse(text)
        if parsed is not None:
            return parsed
    return parse_loose_time(text)


def parse_duration(text: str) -> tuple[int, int] | None:
    """Return ``(minutes, seconds)`` for ``M:SS`` or ``H:MM:SS`` text.

    Hours are folded into minutes; any other shape yields ``None``.
    """

    parts = [part.strip() for part in text.split(":")]
    if not all(_DIGITS.fullmatch(part) for part in parts):
        return None

    numbers = [int(part) for part in parts]
    if len(numbers) == 2:
        return numbers[0], numbers[1]
    if len(numbers) == 3:
        return numbers[0] * 60 + numbers[1], numbers[2]
    return None


def transform_row(row: Sequence[str], columns: ColumnIndex, *, row_number: int) -> TransformResult:
    """Parse one data row. Never raises for bad field text; see ``diagnostics``."""

    row = tuple(row)
    diagnostics: list[Diagnostic] = []

    date_value: date | str = ""
    time_value: time | str = ""
    if columns.is_present("date_time"):
        date_text, time_text = split_date_time(columns.cell(row, "date_time"))

        parsed_date = parse_date(date_text)
        if parsed_date is not None:
            date_value = parsed_date
        else:
            date_value = date_text
            if date_text:
                diagnostics.append(
                    Diagnostic(row_number, "date", date_text, "Unrecognized date; kept as text")
                )

        if time_text:
            parsed_time = parse_time(time_text)
            if parsed_time is not None:
                time_value = parsed_time
            else:
                diagnostics.append(
                    Diagnostic(row_number, "time", time_text, "Unrecognized time; left blank")
                )

    minutes: int | str = ""
    seconds: int | str = ""
    if columns.is_present("duration"):
        duration_text = columns.cell(row, "duration")
        if duration_text:
            parsed_duration = parse_duration(duration_text)
            if parsed_duration is not None:
                minutes, seconds = parsed_duration
            else:
                diagnostics.append(
                    Diagnostic(row_number, "duration", duration_text, "Unrecognized duration; left blank")
                )

    record = ParsedRecord(
        date=date_value,
        time=time_value,
        minutes=minutes,
        seconds=seconds,
        artist=columns.cell(row, "artist"),
        title=columns.cell(row, "title"),
        album=columns.cell(row, "album"),
        composer=columns.cell(row, "composer"),
        year=columns.cell(row, "year"),
        publisher=columns.cell(row, "publisher"),
        copyright=columns.cell(row, "copyright"),
    )
    return TransformResult(record=record, diagnostics=tuple(diagnostics))


__all__ = [
    "DATE_PATTERNS",
    "MIN_PLAUSIBLE_YEAR",
    "TIME_PATTERNS",
    "DatePattern",
    "TimePattern",
    "parse_date",
    "parse_duration",
    "parse_loose_time",
    "parse_time",
    "split_date_time",
    "transform_row",
]
