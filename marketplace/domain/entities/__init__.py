"""Entidades del dominio."""

from marketplace.domain.entities.booking import (
    NON_BLOCKING_STATUSES,
    BookingPaymentStatus,
    BookingStatus,
    PaymentType,
    is_blocking_status,
)
from marketplace.domain.entities.payment import PaymentMethod, PaymentStatus
from marketplace.domain.entities.service import (
    Service,
    ServiceAddon,
    ServiceCategory,
    ServiceProvider,
)

__all__ = [
    "BookingStatus",
    "BookingPaymentStatus",
    "PaymentType",
    "NON_BLOCKING_STATUSES",
    "is_blocking_status",
    "PaymentStatus",
    "PaymentMethod",
    "Service",
    "ServiceAddon",
    "ServiceCategory",
    "ServiceProvider",
]
