"""
Standard booking grid for one working day.

The grid runs from the schedule start to the schedule end inclusive, one
boundary per step, with the lunch window cut out when it is valid.
"""

import logging
from typing import Optional

from agenda_slots.config import settings
from agenda_slots.schemas.schedule_schema import Schedule

logger = logging.getLogger(__name__)


def is_valid_lunch(schedule: Schedule) -> bool:
    """Both bounds present, neither at midnight, and distinct."""
    start = schedule.lunch_start_minutes
    end = schedule.lunch_end_minutes
    if start is None or end is None:
        return False
    if start == 0 or end == 0:
        return False
    return start != end


def lunch_window(schedule: Schedule) -> Optional[tuple[int, int]]:
    """Return ``(lunch_start, lunch_end)`` in minutes, or None if no valid lunch."""
    if not is_valid_lunch(schedule):
        return None
    return schedule.lunch_start_minutes, schedule.lunch_end_minutes


def in_lunch(minutes: int, window: Optional[tuple[int, int]]) -> bool:
    if window is None:
        return False
    return window[0] <= minutes < window[1]


def generate_standard_slots(schedule: Schedule, step: Optional[int] = None) -> list[int]:
    """
    Every grid boundary of the working day, in minutes.

    The end boundary itself is emitted. Day-off schedules yield nothing;
    callers are expected to short-circuit before getting here.
    """
    if schedule.is_day_off:
        return []

    step = step or settings.grid.step_minutes
    window = lunch_window(schedule)
    slots = [
        minutes
        for minutes in range(schedule.start_minutes, schedule.end_minutes + 1, step)
        if not in_lunch(minutes, window)
    ]
    logger.debug(
        "Generated %d standard slots (lunch=%s)", len(slots), window is not None
    )
    return slots
