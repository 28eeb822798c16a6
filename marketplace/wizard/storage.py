"""
Marcador de reserva pendiente.

Cuando un visitante sin sesión abre el wizard se guarda
``{serviceId, timestamp, url}`` antes de redirigir al login. Al volver con
sesión el wizard lo lee y lo borra.
"""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

PENDING_BOOKING_KEY = "pendingBooking"


class PendingBookingStore:
    def save(self, marker: dict) -> None:
        raise NotImplementedError

    def pop(self) -> dict | None:
        """Lee y elimina el marcador; None si no hay ninguno o está corrupto."""
        raise NotImplementedError


class InMemoryPendingBookingStore(PendingBookingStore):
    def __init__(self) -> None:
        self.items: dict[str, str] = {}

    def save(self, marker: dict) -> None:
        self.items[PENDING_BOOKING_KEY] = json.dumps(marker)

    def pop(self) -> dict | None:
        raw = self.items.pop(PENDING_BOOKING_KEY, None)
        return _decode(raw)


class JsonFilePendingBookingStore(PendingBookingStore):
    """Guarda el marcador en un archivo JSON clave/valor (equivalente a un local storage)."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Pending booking store is corrupt; resetting", extra={"path": str(self.path)})
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def save(self, marker: dict) -> None:
        data = self._read_all()
        data[PENDING_BOOKING_KEY] = json.dumps(marker)
        self._write_all(data)

    def pop(self) -> dict | None:
        data = self._read_all()
        raw = data.pop(PENDING_BOOKING_KEY, None)
        if raw is not None:
            self._write_all(data)
        return _decode(raw)


def _decode(raw: str | None) -> dict | None:
    if raw is None:
        return None
    try:
        marker = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Discarding unreadable pending booking marker")
        return None
    return marker if isinstance(marker, dict) else None
