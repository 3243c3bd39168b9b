"""Merge grid, fit-in and appointment-start points into one timeline."""

import logging
from typing import Optional

from agenda_slots.engine.fit_in import detect_fit_in_slots
from agenda_slots.engine.grid import generate_standard_slots
from agenda_slots.schemas.schedule_schema import Appointment, Schedule
from agenda_slots.schemas.slot_schema import DisplaySlot, SlotKind

logger = logging.getLogger(__name__)


def build_unified_slot_list(
    schedule: Schedule,
    appointments: list[Appointment],
    step: Optional[int] = None,
) -> list[DisplaySlot]:
    """
    Standard slots, then fit-in slots, then one slot per appointment start
    not already on the timeline, sorted by minute.

    The sort is stable, so at equal minutes the insertion order above
    decides which slot comes first.
    """
    slots = [DisplaySlot(time=m) for m in generate_standard_slots(schedule, step)]

    for fit_in in detect_fit_in_slots(appointments, schedule, step):
        slots.append(DisplaySlot(time=fit_in.start, kind=SlotKind.FIT_IN, fit_in=fit_in))

    present = {slot.time for slot in slots}
    for appointment in appointments:
        if appointment.is_free:
            continue
        start = appointment.start_minutes
        if start is None:
            logger.debug("Appointment %s has no usable start_time, skipped", appointment.id)
            continue
        if start not in present:
            slots.append(DisplaySlot(time=start, kind=SlotKind.APPOINTMENT_START))
            present.add(start)

    return sorted(slots, key=lambda slot: slot.time)


def resolve_occupant(minutes: int, appointments: list[Appointment]) -> Optional[Appointment]:
    """First appointment, of any status, whose ``[start, end)`` contains ``minutes``."""
    for appointment in appointments:
        if not appointment.has_interval:
            continue
        if appointment.start_minutes <= minutes < appointment.end_minutes:
            return appointment
    return None


def appointment_starting_at(
    minutes: int, appointments: list[Appointment]
) -> Optional[Appointment]:
    """First non-``free`` appointment starting exactly at ``minutes``."""
    for appointment in appointments:
        if appointment.is_free:
            continue
        if appointment.start_minutes == minutes:
            return appointment
    return None
