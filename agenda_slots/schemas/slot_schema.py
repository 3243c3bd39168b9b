"""Engine output models: derived slots and the render plan."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from agenda_slots.schemas.schedule_schema import Appointment


class SlotKind(str, Enum):
    STANDARD = "standard"
    FIT_IN = "fit_in"
    APPOINTMENT_START = "appointment_start"


class DirectiveKind(str, Enum):
    LUNCH_BREAK = "lunch_break"
    AVAILABLE = "available"
    FIT_IN_AVAILABLE = "fit_in_available"
    APPOINTMENT = "appointment"


class FitInSlot(BaseModel):
    """Short bookable gap between an off-grid appointment end and the next boundary."""
    start: int
    end: int
    duration_minutes: int


class DisplaySlot(BaseModel):
    """A point on the day's timeline the renderer visits."""
    time: int
    kind: SlotKind = SlotKind.STANDARD
    fit_in: Optional[FitInSlot] = None


class RenderDirective(BaseModel):
    """One entry of the rendered list, carrying everything a UI needs to draw it."""
    kind: DirectiveKind
    time: str
    end_time: Optional[str] = None
    duration_minutes: Optional[int] = None
    appointment: Optional[Appointment] = None
    title: str = ""
    subtitle: str = ""
    status_label: Optional[str] = None
    notes: Optional[str] = None
    tappable: bool = True


class RenderPlan(BaseModel):
    """Ordered render directives for one day, or the day-off placeholder."""
    day_off: bool = False
    directives: list[RenderDirective] = Field(default_factory=list)
    day_off_title: Optional[str] = None
    day_off_message: Optional[str] = None

    def appointment_ids(self) -> list[int]:
        """Ids of rendered appointments, in render order."""
        return [
            d.appointment.id
            for d in self.directives
            if d.kind == DirectiveKind.APPOINTMENT and d.appointment is not None
        ]
