"""
Reglas de validación del wizard.

Las guardas de cada paso y la validación previa al envío de la reserva usan
las mismas funciones de regla; el resultado es siempre un ``ValidationResult``
con los errores indexados por campo (claves camelCase, como en el formulario).
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from marketplace.domain.entities.booking import PaymentType
from marketplace.wizard.state import BookingDraft, PaymentDraft, WizardStep

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"[0-9]{10}")
CARD_NUMBER_PATTERN = re.compile(r"[0-9]{16}")
EXPIRY_PATTERN = re.compile(r"(0[1-9]|1[0-2])/[0-9]{2}")
CVV_PATTERN = re.compile(r"[0-9]{3,4}")

MIN_NAME_LENGTH = 3
MIN_ADDRESS_LENGTH = 10


@dataclass
class ValidationResult:
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def first_error(self) -> str | None:
        return next(iter(self.errors.values()), None)

    def add(self, key: str, message: str) -> None:
        self.errors.setdefault(key, message)


# Reglas


def has_min_length(value: str | None, minimum: int) -> bool:
    return bool(value) and len(value.strip()) >= minimum


def is_valid_email(value: str | None) -> bool:
    return bool(value) and EMAIL_PATTERN.fullmatch(value) is not None


def is_valid_phone(value: str | None) -> bool:
    if not value:
        return False
    return PHONE_PATTERN.fullmatch(re.sub(r"[\s-]", "", value)) is not None


def is_valid_card_number(value: str | None) -> bool:
    return bool(value) and CARD_NUMBER_PATTERN.fullmatch(value.replace(" ", "")) is not None


def is_valid_expiry(value: str | None) -> bool:
    return bool(value) and EXPIRY_PATTERN.fullmatch(value) is not None


def is_valid_cvv(value: str | None) -> bool:
    return bool(value) and CVV_PATTERN.fullmatch(value) is not None


def parse_schedule(scheduled_date: str, scheduled_time: str) -> datetime | None:
    try:
        return datetime.strptime(f"{scheduled_date}T{scheduled_time}", "%Y-%m-%dT%H:%M")
    except ValueError:
        return None


# Guardas por paso


def validate_service_details(
    draft: BookingDraft,
    available_slots: Sequence[str],
    profile_filled: bool,
) -> ValidationResult:
    result = ValidationResult()
    if not draft.provider_id:
        result.add("providerId", "Provider ID is required")
    if not draft.scheduled_date:
        result.add("scheduledDate", "Date is required")
    if not draft.scheduled_time:
        result.add("scheduledTime", "Time is required")
    elif draft.scheduled_time not in available_slots:
        result.add("scheduledTime", "Selected time is not available")

    # Con perfil auto-rellenado los datos de contacto vienen del servidor
    if not profile_filled:
        if not has_min_length(draft.customer_name, MIN_NAME_LENGTH):
            result.add("customerName", "Name is required (min 3 characters)")
        if not is_valid_email(draft.customer_email):
            result.add("customerEmail", "Invalid email address")
        if not is_valid_phone(draft.customer_phone):
            result.add("customerPhone", "Invalid phone (10 digits)")
    if not has_min_length(draft.customer_address, MIN_ADDRESS_LENGTH):
        result.add("customerAddress", "Address is required (min 10 characters)")
    return result


def validate_payment_type(draft: BookingDraft) -> ValidationResult:
    result = ValidationResult()
    if draft.payment_type not in (PaymentType.INSTANT, PaymentType.CASH_ON_DELIVERY):
        result.add("paymentType", "Please select payment type")
    return result


def validate_card(draft: BookingDraft, payment: PaymentDraft) -> ValidationResult:
    result = ValidationResult()
    if draft.payment_type != PaymentType.INSTANT:
        return result
    if not is_valid_card_number(payment.card_number):
        result.add("cardNumber", "Invalid card number (16 digits)")
    if not has_min_length(payment.card_name, MIN_NAME_LENGTH):
        result.add("cardName", "Card holder name is required")
    if not is_valid_expiry(payment.expiry_date):
        result.add("expiryDate", "Invalid expiry date (MM/YY)")
    if not is_valid_cvv(payment.cvv):
        result.add("cvv", "Invalid CVV (3-4 digits)")
    return result


def validate_step(
    step: WizardStep,
    draft: BookingDraft,
    payment: PaymentDraft,
    available_slots: Sequence[str],
    profile_filled: bool,
) -> ValidationResult:
    if step == WizardStep.SERVICE_DETAILS:
        return validate_service_details(draft, available_slots, profile_filled)
    if step == WizardStep.PAYMENT_TYPE:
        return validate_payment_type(draft)
    if step == WizardStep.PAYMENT:
        return validate_card(draft, payment)
    return ValidationResult()


def validate_submission(draft: BookingDraft, total_amount: Decimal | None) -> ValidationResult:
    """Chequeo inmediatamente anterior a crear la reserva; el primer error se muestra en la página."""
    result = ValidationResult()
    if total_amount is None or not total_amount.is_finite() or total_amount <= 0:
        result.add("totalAmount", "Invalid total amount")
    if parse_schedule(draft.scheduled_date, draft.scheduled_time) is None:
        result.add("scheduledAt", "Invalid booking date and time")
    if not draft.service_id:
        result.add("serviceId", "Service ID is required")
    if not draft.provider_id:
        result.add("providerId", "Provider ID is required")
    if not has_min_length(draft.customer_address, MIN_ADDRESS_LENGTH):
        result.add("customerAddress", "Address is required (min 10 characters)")
    return result
