"""
Fit-in (encaixe) slot detection.

An appointment that ends off the grid leaves a short gap up to the next
grid boundary. That gap is offered as a fit-in slot unless lunch or
another appointment already claims it. ``free`` blocks never create
fit-ins and never count as conflicts.

Usage:
    for slot in detect_fit_in_slots(appointments, schedule):
        print(to_time_string(slot.start), slot.duration_minutes)
"""

from typing import Optional

from agenda_slots.config import settings
from agenda_slots.engine.grid import in_lunch, lunch_window
from agenda_slots.logging_context import get_render_logger
from agenda_slots.schemas.schedule_schema import Appointment, Schedule
from agenda_slots.schemas.slot_schema import FitInSlot
from agenda_slots.utils import next_grid_boundary, to_time_string

logger = get_render_logger(__name__)


def _blocking(appointments: list[Appointment]) -> list[Appointment]:
    """Appointments that can create or block a fit-in."""
    return [a for a in appointments if not a.is_free and a.has_interval]


def _has_exact_conflict(
    appointment: Appointment, others: list[Appointment], end: int
) -> bool:
    return any(
        other.id != appointment.id and other.start_minutes == end
        for other in others
    )


def _has_partial_conflict(
    appointment: Appointment, others: list[Appointment], end: int, boundary: int
) -> bool:
    for other in others:
        if other.id == appointment.id:
            continue
        if end < other.start_minutes < boundary:
            return True
        if end < other.end_minutes < boundary:
            return True
    return False


def detect_fit_in_slots(
    appointments: list[Appointment],
    schedule: Schedule,
    step: Optional[int] = None,
) -> list[FitInSlot]:
    """
    Return the fit-in slots opened by off-grid appointment ends, in input order.

    Candidates are keyed by ``(start, end)``: appointments ending at the same
    off-grid minute yield a single fit-in, the one from the first of them.
    """
    step = step or settings.grid.step_minutes
    window = lunch_window(schedule)
    candidates = _blocking(appointments)
    seen: set[tuple[int, int]] = set()
    fit_ins: list[FitInSlot] = []

    for appointment in candidates:
        end = appointment.end_minutes
        boundary = next_grid_boundary(end, step)
        if boundary == end:
            continue

        if in_lunch(end, window) or in_lunch(boundary, window):
            logger.debug(
                "Fit-in after appointment %s rejected: inside lunch", appointment.id
            )
            continue

        if _has_exact_conflict(appointment, candidates, end):
            logger.debug(
                "Fit-in after appointment %s rejected: next appointment starts at %s",
                appointment.id, to_time_string(end),
            )
            continue

        if _has_partial_conflict(appointment, candidates, end, boundary):
            logger.debug(
                "Fit-in after appointment %s rejected: overlaps %s-%s",
                appointment.id, to_time_string(end), to_time_string(boundary),
            )
            continue

        if (end, boundary) in seen:
            continue
        seen.add((end, boundary))
        fit_ins.append(
            FitInSlot(start=end, end=boundary, duration_minutes=boundary - end)
        )

    return fit_ins
