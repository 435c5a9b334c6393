"""Outline timestamp repair and parsing - pure string functions."""

import re
from datetime import datetime

# Repeater/warning cookies such as "+1w", ".+2d", "++1m", "-3d", "--2h".
REPEATER_RE = re.compile(r"(?:\s+[.+-]?[+-]\d+[ymwdh])+(?=\s*[>\]]?\s*$)")
EXPLICIT_TIME_RE = re.compile(r"\d{4}-\d{2}-\d{2} [^\s\d>\]]+ \d{2}:\d{2}")
TIME_OF_DAY_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
_CLOCK_RE = re.compile(r"(\d{1,2}):(\d{2})")


def strip_repeater(text: str) -> str:
    """Remove trailing repeater and warning-period cookies."""
    return REPEATER_RE.sub("", text.strip())


def has_time_of_day(text: str) -> bool:
    return EXPLICIT_TIME_RE.search(text) is not None


def ensure_time_of_day(text: str, default_time: str) -> str:
    """
    Inject default_time before the closing delimiter unless the timestamp
    already carries an explicit HH:MM.

    Text without a closing delimiter gets the time appended.
    """
    text = text.strip()
    if has_time_of_day(text):
        return text
    if text.endswith((">", "]")):
        return f"{text[:-1]} {default_time}{text[-1]}"
    return f"{text} {default_time}"


def normalize_timestamp(raw: str | None, default_time: str) -> str | None:
    """Strip repeaters and fill in the time of day. None stays None."""
    if raw is None or not raw.strip():
        return None
    return ensure_time_of_day(strip_repeater(raw), default_time)


def parse_timestamp(text: str | None) -> datetime | None:
    """
    Parse a normalized timestamp into a datetime.

    Uses the date and the first clock time after it. Returns None for text
    that does not describe a real date.
    """
    if not text:
        return None
    date_match = _DATE_RE.search(text)
    if not date_match:
        return None
    clock_match = _CLOCK_RE.search(text, date_match.end())
    hour, minute = (int(clock_match.group(1)), int(clock_match.group(2))) if clock_match else (0, 0)
    year, month, day = (int(g) for g in date_match.groups())
    try:
        return datetime(year, month, day, hour, minute)
    except ValueError:
        return None


def is_valid_time_of_day(value: str) -> bool:
    """True for a 24-hour HH:MM string."""
    return TIME_OF_DAY_RE.match(value) is not None
