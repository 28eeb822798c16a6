"""Estado local del wizard de reserva. Nada de esto se persiste tal cual."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import IntEnum

from marketplace.domain.entities.booking import PaymentType
from marketplace.domain.entities.service import ServiceAddon


class WizardStep(IntEnum):
    SERVICE_DETAILS = 1
    PAYMENT_TYPE = 2
    REVIEW = 3
    PAYMENT = 4
    CONFIRMATION = 5


# Campos que se bloquean cuando el perfil del usuario los rellena
PROFILE_FIELDS = ("customer_name", "customer_email", "customer_phone", "customer_address")


@dataclass
class BookingDraft:
    service_id: str
    provider_id: str = ""
    scheduled_date: str = ""  # YYYY-MM-DD
    scheduled_time: str = ""  # HH:MM
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    customer_address: str = ""
    notes: str = ""
    payment_type: PaymentType | None = PaymentType.INSTANT

    @property
    def scheduled_at(self) -> str:
        return f"{self.scheduled_date}T{self.scheduled_time}:00"


@dataclass
class PaymentDraft:
    """Datos de tarjeta; solo sirven para validar formato y derivar la referencia enmascarada."""

    card_number: str = ""
    card_name: str = ""
    expiry_date: str = ""  # MM/YY
    cvv: str = ""

    @property
    def digits(self) -> str:
        return self.card_number.replace(" ", "")

    @property
    def masked_reference(self) -> str:
        return f"CARD_{self.digits[-4:]}"


@dataclass
class ServiceView:
    id: str
    provider_id: str
    provider_name: str
    name: str
    price: Decimal
    currency: str
    duration: int | None = None
    name_ar: str | None = None
    description: str | None = None

    @classmethod
    def from_payload(cls, payload: dict) -> "ServiceView":
        provider = payload.get("provider") or {}
        return cls(
            id=payload["id"],
            provider_id=provider.get("id") or payload.get("providerId", ""),
            provider_name=provider.get("name", ""),
            name=payload["name"],
            price=Decimal(str(payload["price"])),
            currency=payload.get("currency", "SAR"),
            duration=payload.get("duration"),
            name_ar=payload.get("nameAr"),
            description=payload.get("description"),
        )


@dataclass
class ConfirmationSummary:
    booking_id: str
    provider_name: str
    service_name: str
    scheduled_date: str
    scheduled_time: str
    total_amount: float
    currency: str
    payment_type: str
    payment_status: str


@dataclass
class ReviewSummary:
    service_name: str
    provider_name: str
    scheduled_date: str
    scheduled_time: str
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_address: str
    addons: list[ServiceAddon] = field(default_factory=list)
    total_amount: float = 0.0
    currency: str = "SAR"


def addon_from_payload(service_id: str, payload: dict) -> ServiceAddon:
    return ServiceAddon(
        id=payload["id"],
        service_id=service_id,
        name=payload["name"],
        price=Decimal(str(payload["price"])),
        name_ar=payload.get("nameAr"),
        description=payload.get("description"),
        is_required=bool(payload.get("isRequired", False)),
    )
