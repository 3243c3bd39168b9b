from agenda_slots.engine.fit_in import detect_fit_in_slots
from agenda_slots.engine.grid import generate_standard_slots, is_valid_lunch
from agenda_slots.engine.renderer import SlotCallbacks, dispatch_tap, render
from agenda_slots.engine.unified import build_unified_slot_list, resolve_occupant

__all__ = [
    "is_valid_lunch",
    "generate_standard_slots",
    "detect_fit_in_slots",
    "build_unified_slot_list",
    "resolve_occupant",
    "render",
    "SlotCallbacks",
    "dispatch_tap",
]
