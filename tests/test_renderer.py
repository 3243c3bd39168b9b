"""Tests for the render pass and tap dispatch."""

import logging
from collections import Counter

import pytest

from agenda_slots.engine.renderer import SlotCallbacks, dispatch_tap, render
from agenda_slots.logging_context import DEFAULT_RENDER_ID, get_render_id, set_render_id
from agenda_slots.schemas.slot_schema import DirectiveKind
from tests.conftest import make_appointment, make_schedule

A = DirectiveKind.APPOINTMENT
AV = DirectiveKind.AVAILABLE
FI = DirectiveKind.FIT_IN_AVAILABLE
L = DirectiveKind.LUNCH_BREAK


def _summary(plan):
    return [(d.kind, d.time) for d in plan.directives]


class TestDayOff:
    def test_day_off_short_circuits(self):
        schedule = make_schedule("08:00", "18:00", "12:00", "13:00", day_off=True)
        appts = [make_appointment(1, "08:00", "08:23")]
        plan = render(schedule, appts)
        assert plan.day_off is True
        assert plan.directives == []
        assert plan.day_off_title == "Dia de Folga"


class TestBasicRendering:
    def test_empty_day_all_available(self):
        plan = render(make_schedule(start=None, end=None), [])
        assert len(plan.directives) == 41
        assert all(d.kind == AV for d in plan.directives)
        assert plan.directives[0].time == "08:00"
        assert plan.directives[-1].time == "18:00"

    def test_odd_end_appointment(self, short_day, odd_end_appointment):
        plan = render(short_day, [odd_end_appointment])
        assert _summary(plan) == [
            (A, "08:00"),
            (FI, "08:23"),
            (AV, "08:30"),
            (AV, "08:45"),
            (AV, "09:00"),
        ]
        fit_in = plan.directives[1]
        assert fit_in.end_time == "08:30"
        assert fit_in.duration_minutes == 7
        assert fit_in.title == "08:23 até 08:30"
        assert fit_in.subtitle == "Clique para encaixar (7 min disponíveis)"

    def test_available_card_text(self, short_day):
        available = render(short_day, []).directives[0]
        assert available.title == "08:00"
        assert available.subtitle == "Clique para agendar"

    def test_long_appointment_rendered_once(self):
        schedule = make_schedule("08:00", "10:00")
        appt = make_appointment(1, "08:00", "09:00")
        plan = render(schedule, [appt])
        assert _summary(plan) == [
            (A, "08:00"), (AV, "09:00"), (AV, "09:15"),
            (AV, "09:30"), (AV, "09:45"), (AV, "10:00"),
        ]

    def test_off_grid_start_rendered_at_its_own_time(self, short_day):
        appt = make_appointment(1, "08:10", "08:20")
        plan = render(short_day, [appt])
        assert _summary(plan) == [
            (AV, "08:00"),
            (A, "08:10"),
            (FI, "08:20"),
            (AV, "08:30"),
            (AV, "08:45"),
            (AV, "09:00"),
        ]

    def test_appointment_directive_details(self, short_day):
        appt = make_appointment(
            1, "08:00", "08:30",
            client_name="Bruno Lima",
            services=[{"service_id": 3, "service_name": "Corte", "quantity": 1}],
            notes="Primeira visita",
        )
        directive = render(short_day, [appt]).directives[0]
        assert directive.appointment.id == 1
        assert directive.time == "08:00"
        assert directive.end_time == "08:30"
        assert directive.title == "Bruno Lima"
        assert directive.subtitle == "Corte"
        assert directive.status_label == "Confirmado"
        assert directive.notes == "Primeira visita"
        assert directive.tappable


class TestFreeBlocks:
    def test_free_block_rendered_through_occupancy(self, short_day):
        block = make_appointment(1, "08:15", "08:45", status="free")
        plan = render(short_day, [block])
        assert _summary(plan) == [(AV, "08:00"), (A, "08:15"), (AV, "08:45"), (AV, "09:00")]
        directive = plan.directives[1]
        assert directive.title == "Intervalo"
        assert directive.tappable is False

    def test_fit_in_covered_by_free_block_shows_block(self, short_day, odd_end_appointment):
        block = make_appointment(2, "08:20", "08:40", status="free")
        plan = render(short_day, [odd_end_appointment, block])
        assert plan.appointment_ids() == [1, 2]
        assert _summary(plan) == [(A, "08:00"), (A, "08:20"), (AV, "08:45"), (AV, "09:00")]


class TestLunchMarker:
    def test_marker_before_first_slot_after_lunch(self, lunch_day):
        plan = render(lunch_day, [])
        kinds = [d.kind for d in plan.directives]
        assert kinds == [AV, AV, AV, AV, L, AV, AV, AV, AV, AV]
        marker = plan.directives[4]
        assert marker.time == "12:00"
        assert marker.end_time == "13:00"
        assert marker.subtitle == "12:00 às 13:00"
        assert marker.tappable is False

    def test_marker_only_once(self, lunch_day):
        plan = render(lunch_day, [])
        assert sum(1 for d in plan.directives if d.kind == L) == 1

    def test_marker_first_when_day_starts_in_lunch(self):
        schedule = make_schedule("12:30", "14:00", "12:00", "13:00")
        plan = render(schedule, [])
        assert plan.directives[0].kind == L
        assert plan.directives[1].time == "13:00"

    def test_no_marker_without_valid_lunch(self):
        schedule = make_schedule("11:00", "14:00", "12:00", "12:00")
        plan = render(schedule, [])
        assert all(d.kind != L for d in plan.directives)

    def test_no_marker_when_appointment_starts_at_lunch_end(self, lunch_day):
        appt = make_appointment(1, "13:00", "13:30")
        plan = render(lunch_day, [appt])
        assert all(d.kind != L for d in plan.directives)
        assert (AV, "11:45") in _summary(plan)
        assert _summary(plan)[4] == (A, "13:00")

    def test_no_marker_when_first_slot_after_lunch_already_rendered(self, lunch_day):
        appt = make_appointment(1, "11:45", "13:15")
        plan = render(lunch_day, [appt])
        assert all(d.kind != L for d in plan.directives)
        assert _summary(plan) == [
            (AV, "11:00"), (AV, "11:15"), (AV, "11:30"), (A, "11:45"),
            (AV, "13:15"), (AV, "13:30"), (AV, "13:45"), (AV, "14:00"),
        ]


class TestOccupantUniqueness:
    def test_each_appointment_rendered_exactly_once(self):
        schedule = make_schedule(start=None, end=None)
        appts = [
            make_appointment(1, "08:00", "08:23"),
            make_appointment(2, "08:40", "09:05"),
            make_appointment(3, "09:05", "09:50"),
            make_appointment(4, "10:07", "10:30", status="pending"),
            make_appointment(5, "13:00", "14:00", status="completed"),
            make_appointment(6, "17:50", "18:10", status="cancelled"),
        ]
        plan = render(schedule, appts)
        counts = Counter(plan.appointment_ids())
        assert counts == Counter({1: 1, 2: 1, 3: 1, 4: 1, 5: 1, 6: 1})

    def test_directive_times_are_chronological(self):
        schedule = make_schedule(start=None, end=None)
        appts = [
            make_appointment(4, "10:07", "10:30"),
            make_appointment(1, "08:00", "08:23"),
        ]
        plan = render(schedule, appts)
        times = [d.time for d in plan.directives]
        assert times == sorted(times)

    def test_unknown_status_treated_as_occupying(self, short_day):
        appt = make_appointment(1, "08:15", "08:30", status="no_show")
        plan = render(short_day, [appt])
        directive = plan.directives[1]
        assert directive.kind == A
        assert directive.status_label == "no_show"

    def test_appointment_without_times_ignored(self, short_day):
        broken = make_appointment(1, None, None)
        plan = render(short_day, [broken])
        assert all(d.kind == AV for d in plan.directives)


class TestPurity:
    def test_render_is_idempotent(self, lunch_day):
        appts = [
            make_appointment(1, "11:00", "11:23"),
            make_appointment(2, "13:10", "13:40", status="pending"),
        ]
        assert render(lunch_day, appts) == render(lunch_day, appts)

    def test_inputs_not_mutated(self, short_day, odd_end_appointment):
        before = odd_end_appointment.model_dump()
        render(short_day, [odd_end_appointment])
        assert odd_end_appointment.model_dump() == before

    def test_debug_records_carry_render_id(self, short_day, caplog):
        caplog.set_level(logging.DEBUG, logger="agenda_slots.engine.renderer")
        set_render_id("prof-1@2025-03-15")
        render(short_day, [])
        records = [r for r in caplog.records if r.name == "agenda_slots.engine.renderer"]
        assert records
        assert all(r.render_id == "prof-1@2025-03-15" for r in records)

    def test_render_scopes_id_from_schedule(self, caplog):
        caplog.set_level(logging.DEBUG, logger="agenda_slots.engine.renderer")
        schedule = make_schedule().model_copy(
            update={"professional_id": 12, "date": "2025-03-15"}
        )
        render(schedule, [])
        records = [r for r in caplog.records if r.name == "agenda_slots.engine.renderer"]
        assert records
        assert all(r.render_id == "prof-12@2025-03-15" for r in records)
        assert get_render_id() == DEFAULT_RENDER_ID

    def test_render_id_reset_after_day_off(self):
        render(make_schedule(day_off=True), [])
        assert get_render_id() == DEFAULT_RENDER_ID


class TestDispatchTap:
    @pytest.fixture
    def recorder(self):
        calls = []
        callbacks = SlotCallbacks(
            on_slot_click=lambda time, fit_in, end: calls.append(("slot", time, fit_in, end)),
            on_appointment_click=lambda appt: calls.append(("appointment", appt.id)),
        )
        return calls, callbacks

    def test_available_slot(self, short_day, recorder):
        calls, callbacks = recorder
        plan = render(short_day, [])
        assert dispatch_tap(plan.directives[2], callbacks) is True
        assert calls == [("slot", "08:30", False, None)]

    def test_fit_in_slot(self, short_day, odd_end_appointment, recorder):
        calls, callbacks = recorder
        plan = render(short_day, [odd_end_appointment])
        assert dispatch_tap(plan.directives[1], callbacks) is True
        assert calls == [("slot", "08:23", True, "08:30")]

    def test_appointment(self, short_day, odd_end_appointment, recorder):
        calls, callbacks = recorder
        plan = render(short_day, [odd_end_appointment])
        assert dispatch_tap(plan.directives[0], callbacks) is True
        assert calls == [("appointment", 1)]

    def test_free_block_not_tappable(self, short_day, recorder):
        calls, callbacks = recorder
        block = make_appointment(1, "08:00", "08:30", status="free")
        plan = render(short_day, [block])
        assert dispatch_tap(plan.directives[0], callbacks) is False
        assert calls == []

    def test_lunch_marker_not_tappable(self, lunch_day, recorder):
        calls, callbacks = recorder
        plan = render(lunch_day, [])
        assert dispatch_tap(plan.directives[4], callbacks) is False
        assert calls == []

    def test_missing_callback(self, short_day):
        plan = render(short_day, [])
        assert dispatch_tap(plan.directives[0], SlotCallbacks()) is False
