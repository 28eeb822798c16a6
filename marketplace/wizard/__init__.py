"""
Wizard de reserva del lado del cliente.

Orquesta los pasos de reserva contra la API del marketplace: detalles y
horario, tipo de pago, revisión, pago con tarjeta y confirmación.
"""

from marketplace.wizard.client import ApiError, MarketplaceClient
from marketplace.wizard.state import BookingDraft, PaymentDraft, WizardStep
from marketplace.wizard.storage import (
    InMemoryPendingBookingStore,
    JsonFilePendingBookingStore,
    PendingBookingStore,
)
from marketplace.wizard.validation import ValidationResult, validate_step, validate_submission
from marketplace.wizard.wizard import BookingWizard, ReadOnlyFieldError

__all__ = [
    "ApiError",
    "BookingDraft",
    "BookingWizard",
    "InMemoryPendingBookingStore",
    "JsonFilePendingBookingStore",
    "MarketplaceClient",
    "PaymentDraft",
    "PendingBookingStore",
    "ReadOnlyFieldError",
    "ValidationResult",
    "WizardStep",
    "validate_step",
    "validate_submission",
]
