"""
Reglas de agenda: horarios candidatos y detección de traslapes.

Un horario candidato está disponible cuando el intervalo
``[slot, slot + duración del servicio)`` no se traslapa con ninguna reserva
que bloquee la agenda del proveedor.
"""

from collections.abc import Iterable
from datetime import date, datetime, time, timedelta

from marketplace.domain.value_objects.datetime_range import DatetimeRange

DEFAULT_START_HOUR = 9
DEFAULT_END_HOUR = 18
DEFAULT_STEP_MINUTES = 30
DEFAULT_DURATION_MINUTES = 60


def candidate_slots(
    day: date,
    start_hour: int = DEFAULT_START_HOUR,
    end_hour: int = DEFAULT_END_HOUR,
    step_minutes: int = DEFAULT_STEP_MINUTES,
) -> list[datetime]:
    """Horarios de inicio desde ``start_hour`` (incluida) hasta ``end_hour`` (excluida)."""
    if step_minutes <= 0:
        raise ValueError("step_minutes debe ser positivo")
    current = datetime.combine(day, time(hour=start_hour))
    limit = datetime.combine(day, time(hour=0)) + timedelta(hours=end_hour)
    slots: list[datetime] = []
    while current < limit:
        slots.append(current)
        current += timedelta(minutes=step_minutes)
    return slots


def is_slot_free(start: datetime, duration_minutes: int, busy: Iterable[DatetimeRange]) -> bool:
    candidate = DatetimeRange.from_duration(start, duration_minutes)
    return not any(candidate.overlaps_with(interval) for interval in busy)


def generate_available_slots(
    day: date,
    busy: Iterable[DatetimeRange],
    duration_minutes: int | None = None,
    start_hour: int = DEFAULT_START_HOUR,
    end_hour: int = DEFAULT_END_HOUR,
    step_minutes: int = DEFAULT_STEP_MINUTES,
) -> list[str]:
    """
    Retorna los horarios libres del día en formato ``HH:MM``, en orden ascendente.

    Args:
        day: Día consultado.
        busy: Intervalos ocupados por reservas que bloquean la agenda.
        duration_minutes: Duración del servicio; si no se conoce se usan 60 minutos.
        start_hour: Primera hora de atención.
        end_hour: Hora de cierre (ningún horario inicia en ella).
        step_minutes: Separación entre horarios candidatos.
    """
    duration = duration_minutes or DEFAULT_DURATION_MINUTES
    intervals = list(busy)
    return [
        slot.strftime("%H:%M")
        for slot in candidate_slots(day, start_hour, end_hour, step_minutes)
        if is_slot_free(slot, duration, intervals)
    ]
