"""
Render pass: turns a schedule and its appointments into an ordered plan.

Each appointment is rendered at most once. When several timeline points
could represent the same appointment, precedence is:

    1. a non-free appointment starting exactly at the slot minute
    2. a fit-in slot (its occupant, else the fit-in card)
    3. a standard or appointment-start slot (its occupant, else available)

The lunch marker goes right before the first slot of kind 3 that lies
past the lunch start while the previous slot was still before it.

Usage:
    plan = render(schedule, appointments)
    for directive in plan.directives:
        ...
    dispatch_tap(plan.directives[0], SlotCallbacks(on_slot_click=open_booking))
"""

from dataclasses import dataclass
from typing import Callable, Optional

from agenda_slots import labels
from agenda_slots.engine.grid import lunch_window
from agenda_slots.engine.unified import (
    appointment_starting_at,
    build_unified_slot_list,
    resolve_occupant,
)
from agenda_slots.logging_context import get_render_logger, scoped_render_id
from agenda_slots.schemas.schedule_schema import Appointment, Schedule
from agenda_slots.schemas.slot_schema import (
    DirectiveKind,
    DisplaySlot,
    FitInSlot,
    RenderDirective,
    RenderPlan,
    SlotKind,
)
from agenda_slots.utils import to_time_string

logger = get_render_logger(__name__)

SlotClickHandler = Callable[[str, bool, Optional[str]], None]
AppointmentClickHandler = Callable[[Appointment], None]


@dataclass
class SlotCallbacks:
    """Tap handlers supplied by the UI layer; either may be omitted."""

    on_slot_click: Optional[SlotClickHandler] = None
    on_appointment_click: Optional[AppointmentClickHandler] = None


def _appointment_directive(appointment: Appointment, minutes: int) -> RenderDirective:
    start_minutes = appointment.start_minutes
    end_minutes = appointment.end_minutes
    start = to_time_string(start_minutes if start_minutes is not None else minutes)
    end = to_time_string(end_minutes) if end_minutes is not None else None
    subtitle = labels.service_names(appointment.services) if appointment.services else ""
    return RenderDirective(
        kind=DirectiveKind.APPOINTMENT,
        time=start,
        end_time=end,
        appointment=appointment,
        title=labels.client_display_name(appointment),
        subtitle=subtitle,
        status_label=labels.status_label(appointment.status),
        notes=appointment.notes,
        tappable=not appointment.is_free,
    )


def _fit_in_directive(fit_in: FitInSlot) -> RenderDirective:
    start = to_time_string(fit_in.start)
    end = to_time_string(fit_in.end)
    return RenderDirective(
        kind=DirectiveKind.FIT_IN_AVAILABLE,
        time=start,
        end_time=end,
        duration_minutes=fit_in.duration_minutes,
        title=labels.fit_in_range(start, end),
        subtitle=labels.fit_in_subtitle(fit_in.duration_minutes),
    )


def _available_directive(minutes: int) -> RenderDirective:
    return RenderDirective(
        kind=DirectiveKind.AVAILABLE,
        time=to_time_string(minutes),
        title=to_time_string(minutes),
        subtitle=labels.AVAILABLE_SUBTITLE,
    )


def _lunch_directive(schedule: Schedule) -> RenderDirective:
    start = to_time_string(schedule.lunch_start_minutes)
    end = to_time_string(schedule.lunch_end_minutes)
    return RenderDirective(
        kind=DirectiveKind.LUNCH_BREAK,
        time=start,
        end_time=end,
        title=labels.LUNCH_TITLE,
        subtitle=labels.time_range(start, end),
        tappable=False,
    )


def _day_off_plan() -> RenderPlan:
    return RenderPlan(
        day_off=True,
        day_off_title=labels.DAY_OFF_TITLE,
        day_off_message=labels.DAY_OFF_MESSAGE,
    )


def render(
    schedule: Schedule,
    appointments: list[Appointment],
    step: Optional[int] = None,
) -> RenderPlan:
    """Build the render plan for one day. Pure: the same inputs give the same plan."""
    with scoped_render_id(schedule.professional_id, schedule.date):
        return _build_plan(schedule, appointments, step)


def _build_plan(
    schedule: Schedule,
    appointments: list[Appointment],
    step: Optional[int],
) -> RenderPlan:
    if schedule.is_day_off:
        logger.debug("Day off for schedule %s, no slots", schedule.id)
        return _day_off_plan()

    slots: list[DisplaySlot] = build_unified_slot_list(schedule, appointments, step)
    window = lunch_window(schedule)
    rendered: set[int] = set()
    directives: list[RenderDirective] = []

    for index, slot in enumerate(slots):
        starting_here = appointment_starting_at(slot.time, appointments)
        if starting_here is not None and starting_here.id not in rendered:
            rendered.add(starting_here.id)
            directives.append(_appointment_directive(starting_here, slot.time))
            continue

        occupant = resolve_occupant(slot.time, appointments)

        if slot.kind == SlotKind.FIT_IN and slot.fit_in is not None:
            if occupant is None:
                directives.append(_fit_in_directive(slot.fit_in))
            elif occupant.id not in rendered:
                rendered.add(occupant.id)
                directives.append(_appointment_directive(occupant, slot.time))
            continue

        if occupant is not None and occupant.id in rendered:
            continue
        if occupant is not None:
            rendered.add(occupant.id)

        if window is not None and slot.time > window[0]:
            if index == 0 or slots[index - 1].time < window[0]:
                directives.append(_lunch_directive(schedule))

        if occupant is not None:
            directives.append(_appointment_directive(occupant, slot.time))
        else:
            directives.append(_available_directive(slot.time))

    logger.debug(
        "Rendered %d directives from %d slots, %d appointments shown",
        len(directives), len(slots), len(rendered),
    )
    return RenderPlan(directives=directives)


def dispatch_tap(directive: RenderDirective, callbacks: SlotCallbacks) -> bool:
    """
    Route a tap on ``directive`` to the matching callback.

    Returns True if a callback was invoked. Lunch markers and ``free``
    blocks are not tappable.
    """
    if directive.kind == DirectiveKind.AVAILABLE:
        if callbacks.on_slot_click is None:
            return False
        callbacks.on_slot_click(directive.time, False, None)
        return True

    if directive.kind == DirectiveKind.FIT_IN_AVAILABLE:
        if callbacks.on_slot_click is None:
            return False
        callbacks.on_slot_click(directive.time, True, directive.end_time)
        return True

    if directive.kind == DirectiveKind.APPOINTMENT:
        appointment = directive.appointment
        if appointment is None or appointment.is_free:
            return False
        if callbacks.on_appointment_click is None:
            return False
        callbacks.on_appointment_click(appointment)
        return True

    return False
