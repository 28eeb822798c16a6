"""Estados y métodos de pago."""

from enum import Enum


class PaymentStatus(str, Enum):
    """Estados de un pago."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"

    @property
    def is_active(self) -> bool:
        """Un pago pendiente o completado impide registrar otro para la misma reserva."""
        return self in (PaymentStatus.PENDING, PaymentStatus.COMPLETED)


class PaymentMethod(str, Enum):
    """Métodos de pago aceptados."""

    CARD = "card"
    WALLET = "wallet"
    BANK_TRANSFER = "bank_transfer"
    CASH = "cash"
