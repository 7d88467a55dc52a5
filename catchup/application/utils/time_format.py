from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class TimeFormat(str, Enum):
    twelve_hour = "12"
    twenty_four_hour = "24"


DEFAULT_TIME_FORMAT = TimeFormat.twelve_hour

TIME_24H_PATTERN = re.compile(r"\d{2}:\d{2}", re.ASCII)
TIME_12H_PATTERN = re.compile(r"(\d{1,2}):(\d{2})\s?(AM|PM)", re.IGNORECASE | re.ASCII)


@dataclass(frozen=True)
class ParsedTime:
    """Result of parsing a time string.

    When `recognized` is False, `hour`/`minute`/`shape` are None and callers
    should keep `original` as it is.
    """

    original: str
    recognized: bool
    hour: int | None = None  # 0-23
    minute: int | None = None
    shape: TimeFormat | None = None


def resolve_time_format(preference: TimeFormat | str | None) -> TimeFormat:
    """Map a user preference ("12", "24", a TimeFormat or None) to a TimeFormat."""
    if preference is None or preference == "":
        return DEFAULT_TIME_FORMAT
    return TimeFormat(str(getattr(preference, "value", preference)))


def parse_time(time: str) -> ParsedTime:
    """Parse a 24-hour `HH:MM` or 12-hour `H:MM AM|PM` string."""
    text = time or ""

    if TIME_24H_PATTERN.fullmatch(text):
        hour, minute = (int(part) for part in text.split(":"))
        if 0 <= hour <= 23 and 0 <= minute <= 59:
            return ParsedTime(text, True, hour, minute, TimeFormat.twenty_four_hour)
        return ParsedTime(text, False)

    match = TIME_12H_PATTERN.fullmatch(text)
    if match:
        hour = int(match.group(1))
        minute = int(match.group(2))
        is_pm = match.group(3).lower() == "pm"
        if not (1 <= hour <= 12 and 0 <= minute <= 59):
            return ParsedTime(text, False)
        if is_pm and hour != 12:
            hour += 12
        elif not is_pm and hour == 12:
            hour = 0
        return ParsedTime(text, True, hour, minute, TimeFormat.twelve_hour)

    return ParsedTime(text, False)


def _render(hour: int, minute: int, time_format: TimeFormat) -> str:
    if time_format == TimeFormat.twenty_four_hour:
        return f"{hour:02d}:{minute:02d}"
    display_hour = 12 if hour == 0 else hour - 12 if hour > 12 else hour
    period = "PM" if hour >= 12 else "AM"
    return f"{display_hour}:{minute:02d} {period}"


def format_time(time: str, preference: TimeFormat | str | None = None) -> str:
    """Render `time` in the user's preferred format.

    Input already in the preferred shape comes back untouched. Unrecognized
    input is returned as is.
    """
    if not time:
        return ""

    time_format = resolve_time_format(preference)
    if is_valid_time_format(time, time_format):
        return time

    parsed = parse_time(time)
    if not parsed.recognized:
        logger.debug("Unrecognized time value, leaving unchanged", extra={"time": time})
        return time
    return _render(parsed.hour, parsed.minute, time_format)


def to_24_hour(time: str) -> str:
    """Convert any recognized time to `HH:MM` for storage."""
    if not time:
        return ""
    if TIME_24H_PATTERN.fullmatch(time):
        return time
    parsed = parse_time(time)
    if not parsed.recognized:
        logger.debug("Unrecognized time value, leaving unchanged", extra={"time": time})
        return time
    return _render(parsed.hour, parsed.minute, TimeFormat.twenty_four_hour)


def to_12_hour(time: str) -> str:
    """Convert a 24-hour time to `H:MM AM|PM`."""
    if not time:
        return ""
    if TIME_12H_PATTERN.fullmatch(time):
        return time
    parsed = parse_time(time)
    if not parsed.recognized:
        logger.debug("Unrecognized time value, leaving unchanged", extra={"time": time})
        return time
    return _render(parsed.hour, parsed.minute, TimeFormat.twelve_hour)


def generate_time_options(
    preference: TimeFormat | str | None = None,
    start_hour: int = 0,
    end_hour: int = 23,
    interval_minutes: int = 30,
) -> list[str]:
    """Time-of-day options for a select input, from start_hour:00 through end_hour:00."""
    if interval_minutes <= 0:
        raise ValueError("interval_minutes must be positive")
    if not (0 <= start_hour <= 23 and 0 <= end_hour <= 23):
        raise ValueError("start_hour and end_hour must be between 0 and 23")
    if start_hour > end_hour:
        raise ValueError("start_hour must not be after end_hour")

    time_format = resolve_time_format(preference)
    options: list[str] = []
    current = start_hour * 60
    last = end_hour * 60
    while current <= last:
        options.append(_render(current // 60, current % 60, time_format))
        current += interval_minutes
    return options


def get_time_input_type(preference: TimeFormat | str | None = None) -> str:
    # HTML time inputs are always 24-hour, so 12-hour users get a text input
    if resolve_time_format(preference) == TimeFormat.twenty_four_hour:
        return "time"
    return "text"


def is_valid_time_format(time: str, preference: TimeFormat | str | None = None) -> bool:
    if not time:
        return False
    if resolve_time_format(preference) == TimeFormat.twenty_four_hour:
        return bool(TIME_24H_PATTERN.fullmatch(time))
    return bool(TIME_12H_PATTERN.fullmatch(time))
