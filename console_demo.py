"""
Offline console agenda — renders one day's slot list in the terminal.

Runs the real slot engine against a JSON day file or a built-in scenario.
No backend, no network calls. Handy for checking how an odd agenda will
look before it reaches the app.

Usage:
    python console_demo.py
    python console_demo.py --scenario lunch
    python console_demo.py --file day.json --tap 09:23
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from agenda_slots.config import settings
from agenda_slots.engine.renderer import SlotCallbacks, dispatch_tap, render
from agenda_slots.logging_context import set_render_id
from agenda_slots.schemas.schedule_schema import Appointment, Schedule
from agenda_slots.schemas.slot_schema import DirectiveKind, RenderDirective, RenderPlan

logger = logging.getLogger(__name__)

GREEN = "\033[92m"
YELLOW = "\033[93m"
BLUE = "\033[94m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

SCENARIOS: dict[str, dict[str, Any]] = {
    "regular": {
        "schedule": {"start_time": "08:00", "end_time": "10:00", "is_day_off": False},
        "appointments": [
            {
                "id": 1,
                "start_time": "08:00:00",
                "end_time": "08:23:00",
                "status": "confirmed",
                "client": {"id": 7, "name": "Ana Souza"},
                "services": [{"service_id": 3, "service_name": "Corte", "quantity": 1}],
            },
            {
                "id": 2,
                "start_time": "09:10:00",
                "end_time": "09:40:00",
                "status": "pending",
                "client_name": "Bruno Lima",
                "services": [],
            },
        ],
    },
    "lunch": {
        "schedule": {
            "start_time": "11:00",
            "end_time": "14:00",
            "lunch_start_time": "12:00",
            "lunch_end_time": "13:00",
            "is_day_off": False,
        },
        "appointments": [
            {
                "id": 10,
                "start_time": "11:15:00",
                "end_time": "11:50:00",
                "status": "confirmed",
                "client": {"id": 4, "name": "Carla Dias"},
                "services": [{"service_id": 9, "quantity": 1}],
            },
            {
                "id": 11,
                "start_time": "13:00:00",
                "end_time": "13:30:00",
                "status": "free",
                "notes": "Reunião",
                "services": [],
            },
        ],
    },
    "day_off": {
        "schedule": {"start_time": "08:00", "end_time": "18:00", "is_day_off": True},
        "appointments": [],
    },
}


def load_day(data: dict[str, Any]) -> tuple[Schedule, list[Appointment]]:
    """Validate a ``{"schedule": ..., "appointments": [...]}`` payload."""
    schedule = Schedule(**data.get("schedule", {}))
    appointments = [Appointment(**item) for item in data.get("appointments", [])]
    return schedule, appointments


def load_day_file(path: Path) -> tuple[Schedule, list[Appointment]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return load_day(data)


def format_directive(directive: RenderDirective) -> str:
    """One console line for a render directive."""
    if directive.kind == DirectiveKind.LUNCH_BREAK:
        return f"{YELLOW}  --- {directive.title}: {directive.subtitle} ---{RESET}"
    if directive.kind == DirectiveKind.AVAILABLE:
        return f"{GREEN}{directive.title}  {directive.subtitle}{RESET}"
    if directive.kind == DirectiveKind.FIT_IN_AVAILABLE:
        return f"{YELLOW}{directive.title}  {directive.subtitle}{RESET}"
    line = f"{BLUE}{BOLD}{directive.time}-{directive.end_time}  {directive.title}{RESET}"
    if directive.status_label:
        line += f" {DIM}[{directive.status_label.upper()}]{RESET}"
    if directive.subtitle:
        line += f"\n       {directive.subtitle}"
    if directive.notes:
        line += f"\n       {DIM}{directive.notes}{RESET}"
    return line


def print_plan(plan: RenderPlan) -> None:
    print()
    print(f"{BOLD}{'=' * 60}{RESET}")
    print(f"{BOLD}  {settings.agenda_name.upper()}{RESET}")
    print(f"{BOLD}{'=' * 60}{RESET}")
    if plan.day_off:
        print(f"\n{BOLD}  {plan.day_off_title}{RESET}")
        print(f"{DIM}  {plan.day_off_message}{RESET}\n")
        return
    for directive in plan.directives:
        print(format_directive(directive))
    print(f"{BOLD}{'=' * 60}{RESET}")


def simulate_tap(plan: RenderPlan, time: str) -> Optional[str]:
    """Tap the first tappable directive at ``time``; returns what fired."""
    fired: list[str] = []
    callbacks = SlotCallbacks(
        on_slot_click=lambda t, fit_in, end: fired.append(
            f"on_slot_click({t!r}, {fit_in}, {end!r})"
        ),
        on_appointment_click=lambda appt: fired.append(
            f"on_appointment_click(id={appt.id})"
        ),
    )
    for directive in plan.directives:
        if directive.time == time and dispatch_tap(directive, callbacks):
            return fired[0]
    return None


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline console agenda")
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--scenario",
        choices=sorted(SCENARIOS),
        default="regular",
        help="Render a built-in day",
    )
    source.add_argument(
        "--file",
        type=str,
        default=None,
        help="Path to a JSON file with 'schedule' and 'appointments'",
    )
    parser.add_argument(
        "--tap",
        type=str,
        default=None,
        help="Simulate a tap on the slot at HH:MM",
    )
    args = parser.parse_args()

    if args.file:
        path = Path(args.file)
        if not path.exists():
            logger.error("Day file not found: %s", path)
            sys.exit(1)
        schedule, appointments = load_day_file(path)
        set_render_id(path.stem)
    else:
        schedule, appointments = load_day(SCENARIOS[args.scenario])

    plan = render(schedule, appointments)
    print_plan(plan)

    if args.tap:
        fired = simulate_tap(plan, args.tap)
        if fired:
            print(f"{DIM}  >> {fired}{RESET}")
        else:
            print(f"{RED}Nothing tappable at {args.tap}{RESET}")


if __name__ == "__main__":
    main()
