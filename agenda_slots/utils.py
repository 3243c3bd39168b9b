"""Time-of-day helpers shared across the slot engine.

Times travel as ``"HH:MM"`` / ``"HH:MM:SS"`` strings at the edges and as
integer minutes since midnight everywhere else.
"""

import re
from typing import Optional

_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*$")


def parse_time(value: Optional[str]) -> Optional[int]:
    """Parse ``"HH:MM"`` or ``"HH:MM:SS"`` into minutes since midnight.

    Seconds are dropped. Returns None for missing or malformed input.

    Examples:
        >>> parse_time("09:23:00")
        563
        >>> parse_time("") is None
        True
    """
    if not value:
        return None
    match = _TIME_RE.match(value)
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes > 59 or hours > 24 or (hours == 24 and minutes > 0):
        return None
    return hours * 60 + minutes


def to_minutes(value: Optional[str]) -> int:
    """Like parse_time, but falsy or malformed input gives 0."""
    minutes = parse_time(value)
    return minutes if minutes is not None else 0


def to_time_string(minutes: int) -> str:
    """Format minutes since midnight as ``"HH:MM"``.

    Examples:
        >>> to_time_string(563)
        '09:23'
    """
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def next_grid_boundary(minutes: int, step: int = 15) -> int:
    """Round up to the next multiple of ``step``; aligned values are unchanged."""
    return minutes + ((step - minutes % step) % step)
