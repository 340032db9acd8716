"""Small formatting helpers shared by the bar modules."""

from __future__ import annotations

from datetime import timedelta
from enum import Enum


class IndicatorState(Enum):
    """Visual emphasis for a status indicator."""

    NORMAL = "normal"
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"


def format_duration(duration: timedelta | int | float) -> str:
    """Render a duration as hours and right-aligned minutes, e.g. ``"1h  5m"``.

    Seconds are truncated; a duration under an hour shows minutes only.
    """
    if isinstance(duration, timedelta):
        seconds = int(duration.total_seconds())
    else:
        seconds = int(duration)
    if seconds < 0:
        raise ValueError("duration must not be negative")

    hours = seconds // 3600
    minutes = seconds // 60 % 60
    if hours > 0:
        return f"{hours}h {minutes:>2}m"
    return f"{minutes:>2}m"


def truncate_text(value: str, max_length: int) -> str:
    """Shorten ``value`` to its head and tail joined by ``...``.

    The length compared against ``max_length`` is the UTF-8 byte length.
    Text that fits is returned unchanged.
    """
    if max_length < 0:
        raise ValueError("max_length must not be negative")

    length = len(value.encode("utf-8"))
    if length <= max_length:
        return value

    split = max_length // 2
    first_part = value[:split]
    last_part = value[length - split:]
    return f"{first_part}...{last_part}"