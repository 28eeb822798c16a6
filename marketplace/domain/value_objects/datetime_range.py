"""Value Object DatetimeRange - intervalo ocupado por una reserva o un horario."""

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class DatetimeRange:
    """
    Value Object inmutable que representa un intervalo semiabierto [start, end).

    Attributes:
        start: Inicio del intervalo.
        end: Fin del intervalo (excluido).
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValueError(
                f"start debe ser anterior a end: {self.start} >= {self.end}"
            )

    @property
    def duration(self) -> timedelta:
        """Retorna la duración del rango."""
        return self.end - self.start

    def overlaps_with(self, other: "DatetimeRange") -> bool:
        """Verifica si este rango se superpone con otro (los bordes no cuentan)."""
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()} -> {self.end.isoformat()}"

    @classmethod
    def from_duration(cls, start: datetime, minutes: int) -> "DatetimeRange":
        """Factory method para crear desde un inicio y una duración en minutos."""
        return cls(start=start, end=start + timedelta(minutes=minutes))
