"""
Display strings attached to render directives.

The agenda ships in pt-BR; all user-facing text lives here so renderers
only lay it out.
"""

from agenda_slots.schemas.schedule_schema import Appointment, AppointmentStatus, ServiceLine

STATUS_LABELS: dict[str, str] = {
    AppointmentStatus.CONFIRMED.value: "Confirmado",
    AppointmentStatus.PENDING.value: "Pendente",
    AppointmentStatus.CANCELLED.value: "Cancelado",
    AppointmentStatus.COMPLETED.value: "Concluído",
    AppointmentStatus.FREE.value: "Intervalo",
}

AVAILABLE_SUBTITLE = "Clique para agendar"
LUNCH_TITLE = "Intervalo de almoço"
DAY_OFF_TITLE = "Dia de Folga"
DAY_OFF_MESSAGE = (
    "Este profissional está de folga hoje.\n"
    "Não há horários disponíveis para agendamento."
)
NO_SERVICES = "Sem serviços"
UNKNOWN_CLIENT = "Cliente não identificado"


def status_label(status: str) -> str:
    """Human label for an appointment status; unknown statuses pass through."""
    return STATUS_LABELS.get(status, status)


def service_names(services: list[ServiceLine]) -> str:
    if not services:
        return NO_SERVICES
    names = []
    for line in services:
        if line.service_name:
            names.append(line.service_name)
        elif line.service is not None and line.service.name:
            names.append(line.service.name)
        else:
            names.append(f"Serviço #{line.service_id}")
    return ", ".join(names)


def client_display_name(appointment: Appointment) -> str:
    if appointment.is_free:
        return STATUS_LABELS[AppointmentStatus.FREE.value]
    if appointment.client is not None and appointment.client.name:
        return appointment.client.name
    return appointment.client_name or UNKNOWN_CLIENT


def time_range(start: str, end: str) -> str:
    return f"{start} às {end}"


def fit_in_subtitle(duration_minutes: int) -> str:
    return f"Clique para encaixar ({duration_minutes} min disponíveis)"


def fit_in_range(start: str, end: str) -> str:
    return f"{start} até {end}"
