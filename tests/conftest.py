"""Shared test fixtures and helpers."""

from typing import Optional

import pytest

from agenda_slots.logging_context import DEFAULT_RENDER_ID, set_render_id
from agenda_slots.schemas.schedule_schema import Appointment, Schedule


def make_schedule(
    start: Optional[str] = "08:00",
    end: Optional[str] = "09:00",
    lunch_start: Optional[str] = None,
    lunch_end: Optional[str] = None,
    day_off: bool = False,
) -> Schedule:
    """Helper to create a Schedule with sensible defaults."""
    return Schedule(
        start_time=start,
        end_time=end,
        lunch_start_time=lunch_start,
        lunch_end_time=lunch_end,
        is_day_off=day_off,
    )


def make_appointment(
    appointment_id: int,
    start: Optional[str],
    end: Optional[str],
    status: str = "confirmed",
    client_name: Optional[str] = None,
    services: Optional[list[dict]] = None,
    notes: Optional[str] = None,
) -> Appointment:
    """Helper to create an Appointment; times may be given as HH:MM or HH:MM:SS."""
    return Appointment(
        id=appointment_id,
        start_time=_with_seconds(start),
        end_time=_with_seconds(end),
        status=status,
        client_name=client_name,
        services=services or [],
        notes=notes,
    )


def _with_seconds(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value) == 5:
        return value + ":00"
    return value


@pytest.fixture
def short_day():
    return make_schedule("08:00", "09:00")


@pytest.fixture
def lunch_day():
    return make_schedule("11:00", "14:00", "12:00", "13:00")


@pytest.fixture
def odd_end_appointment():
    return make_appointment(1, "08:00", "08:23")


@pytest.fixture(autouse=True)
def clean_render_id():
    set_render_id(DEFAULT_RENDER_ID)
    yield
    set_render_id(DEFAULT_RENDER_ID)
