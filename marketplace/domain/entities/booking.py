"""Estados de una reserva (booking) y su tipo de pago."""

from enum import Enum


class BookingStatus(str, Enum):
    """Estados posibles de una reserva."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class BookingPaymentStatus(str, Enum):
    """Estados de pago de una reserva."""

    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class PaymentType(str, Enum):
    """Forma en que el cliente liquida la reserva."""

    INSTANT = "instant"
    CASH_ON_DELIVERY = "cash_on_delivery"


# Una reserva en cualquier otro estado ocupa su horario
NON_BLOCKING_STATUSES = frozenset({BookingStatus.CANCELLED.value, BookingStatus.REFUNDED.value})


def is_blocking_status(status: str) -> bool:
    """Indica si una reserva con este estado bloquea el horario del proveedor."""
    return status not in NON_BLOCKING_STATUSES
