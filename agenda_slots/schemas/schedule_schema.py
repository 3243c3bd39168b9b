"""Schedule and appointment models as delivered by the scheduling backend."""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field

from agenda_slots.config import settings
from agenda_slots.utils import parse_time, to_minutes


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FREE = "free"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Client(BaseModel):
    """Client reference embedded in an appointment."""
    id: int
    name: str
    email: Optional[str] = None
    phone_number: Optional[str] = None


class CatalogService(BaseModel):
    id: int
    name: str
    price: Optional[float] = None


class ServiceLine(BaseModel):
    """One service line item of an appointment."""
    service_id: int
    service_name: Optional[str] = None
    quantity: int = 1
    price: Optional[Union[str, float]] = None
    service: Optional[CatalogService] = None


class Schedule(BaseModel):
    """
    One professional's availability for one date.

    Time fields stay as the backend sent them; the ``*_minutes``
    properties are the parsed view the engine works with.
    """
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    lunch_start_time: Optional[str] = None
    lunch_end_time: Optional[str] = None
    is_day_off: bool = False
    id: Optional[int] = None
    professional_id: Optional[int] = None
    company_id: Optional[int] = None
    date: Optional[str] = None
    day_of_week: Optional[str] = None
    is_specific_date: bool = False

    @property
    def start_minutes(self) -> int:
        minutes = parse_time(self.start_time)
        if minutes is None:
            return to_minutes(settings.grid.default_start_time)
        return minutes

    @property
    def end_minutes(self) -> int:
        minutes = parse_time(self.end_time)
        if minutes is None:
            return to_minutes(settings.grid.default_end_time)
        return minutes

    @property
    def lunch_start_minutes(self) -> Optional[int]:
        return parse_time(self.lunch_start_time)

    @property
    def lunch_end_minutes(self) -> Optional[int]:
        return parse_time(self.lunch_end_time)


class Appointment(BaseModel):
    """An occupant of a contiguous interval on the day."""
    id: int
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    status: str = AppointmentStatus.PENDING.value
    client: Optional[Client] = None
    client_name: Optional[str] = None
    services: list[ServiceLine] = Field(default_factory=list)
    notes: Optional[str] = None
    professional_id: Optional[int] = None
    client_id: Optional[int] = None
    appointment_date: Optional[str] = None

    @property
    def start_minutes(self) -> Optional[int]:
        return parse_time(self.start_time)

    @property
    def end_minutes(self) -> Optional[int]:
        return parse_time(self.end_time)

    @property
    def has_interval(self) -> bool:
        """True when both bounds parse; interval algorithms skip the rest."""
        return self.start_minutes is not None and self.end_minutes is not None

    @property
    def is_free(self) -> bool:
        return self.status == AppointmentStatus.FREE.value
