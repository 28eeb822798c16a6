"""
Capa de Dominio - Marketplace de servicios.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks.
Incluye entidades, value objects, reglas de precio/agenda y excepciones de dominio.

Estructura:
- entities/: Entidades del dominio (Service, Booking, Payment, etc.)
- value_objects/: Objetos de valor inmutables (Money, DatetimeRange)
- pricing.py: Cálculo del total de una reserva
- scheduling.py: Generación de horarios disponibles
- errors.py: Excepciones específicas del dominio
- constants.py: Constantes del dominio
"""

from marketplace.domain.entities import (
    BookingPaymentStatus,
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
    PaymentType,
    Service,
    ServiceAddon,
    ServiceCategory,
    ServiceProvider,
)
from marketplace.domain.errors import DomainError
from marketplace.domain.pricing import calculate_total, ensure_required_addons
from marketplace.domain.scheduling import generate_available_slots, is_slot_free
from marketplace.domain.value_objects import DatetimeRange, Money

__all__ = [
    # Entities
    "BookingStatus",
    "BookingPaymentStatus",
    "PaymentType",
    "PaymentStatus",
    "PaymentMethod",
    "Service",
    "ServiceAddon",
    "ServiceCategory",
    "ServiceProvider",
    # Rules
    "calculate_total",
    "ensure_required_addons",
    "generate_available_slots",
    "is_slot_free",
    # Errors
    "DomainError",
    # Value Objects
    "DatetimeRange",
    "Money",
]
