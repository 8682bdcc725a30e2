"""Domain helpers for field validation and normalization.

Every helper is pure: it receives the raw JSON value and returns the
normalized value, or None when the value is not acceptable. Callers decide
which error to raise.
"""
from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
NON_DIGITS = re.compile(r"\D+")
LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
LEADING_INT = re.compile(r"\s*([+-]?\d+)")
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def is_blank(value: Any) -> bool:
    """True for values a create request must not leave empty."""
    return value is None or value == ""


def is_email(value: Any) -> bool:
    """Basic local@domain.tld shape, nothing fancier."""
    if not isinstance(value, str):
        return False
    return bool(EMAIL_PATTERN.fullmatch(value))


def normalize_phone(value: Any) -> str:
    """Keep only digits; missing values become an empty string."""
    if value is None:
        return ""
    return NON_DIGITS.sub("", str(value))


def sanitize_choice(value: Any, choices: Iterable[str], default: str) -> str:
    """Return value when it is one of choices, otherwise the default."""
    return value if isinstance(value, str) and value in tuple(choices) else default


def _round2(number: float) -> Optional[float]:
    # half-up on the scaled value, same result the old API stored
    try:
        return math.floor(number * 100 + 0.5) / 100
    except OverflowError:
        return None


def parse_number(value: Any) -> Optional[float]:
    """Parse the leading float of value ("19.9abc" -> 19.9)."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return None
    match = LEADING_FLOAT.match(str(value))
    if not match:
        return None
    return float(match.group(1))


def to_money(value: Any) -> Optional[float]:
    """Finite, non-negative amount rounded to 2 decimal places."""
    number = parse_number(value)
    if number is None or not math.isfinite(number) or number < 0:
        return None
    return _round2(number)


def to_percentage(value: Any) -> Optional[float]:
    number = parse_number(value)
    if number is None or not math.isfinite(number) or number < 0 or number > 100:
        return None
    return _round2(number)


def to_non_negative_int(value: Any) -> Optional[int]:
    """Parse the leading integer of value ("8.7" -> 8) and reject negatives."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        number = int(value)
    elif isinstance(value, int):
        number = value
    else:
        match = LEADING_INT.match(str(value))
        if not match:
            return None
        number = int(match.group(1))
    return number if number >= 0 else None


def parse_date(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 date/datetime into an aware UTC datetime.

    Naive values are taken as UTC. Returns None for anything unparseable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        return None


def format_timestamp(value: datetime) -> str:
    """Render a datetime in the fixed "YYYY-MM-DD HH:mm:ss" storage form."""
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def now_timestamp() -> str:
    return format_timestamp(datetime.now(timezone.utc))
