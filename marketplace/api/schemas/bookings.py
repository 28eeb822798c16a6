from datetime import datetime

from pydantic import Field, field_validator

from marketplace.api.schemas.common import CamelModel, CamelRequest
from marketplace.application.interfaces.booking_repo import BookingRecord
from marketplace.domain.entities.booking import PaymentType


class AvailableSlotsResponse(CamelModel):
    success: bool = True
    available_slots: list[str]
    duration: int


class CreateBookingRequest(CamelRequest):
    service_id: str = Field(min_length=1)
    provider_id: str = Field(min_length=1)
    scheduled_at: datetime
    customer_address: str
    notes: str | None = None
    addons: list[str] = Field(default_factory=list)
    payment_type: PaymentType = PaymentType.INSTANT

    @field_validator("scheduled_at")
    @classmethod
    def drop_timezone(cls, value: datetime) -> datetime:
        # Los horarios se manejan en hora local del tenant
        return value.replace(tzinfo=None, second=0, microsecond=0)

    @field_validator("customer_address")
    @classmethod
    def validate_address(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 10:
            raise ValueError("Address is required (min 10 characters)")
        return value

    @field_validator("addons")
    @classmethod
    def dedupe_addons(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))


class CreateBookingResponse(CamelModel):
    success: bool = True
    booking_id: str
    total_amount: float
    status: str
    payment_status: str


class BookingSummary(CamelModel):
    id: str
    service_id: str
    provider_id: str
    scheduled_at: datetime
    duration: int
    status: str
    payment_status: str
    payment_type: str
    total_amount: float
    currency: str
    customer_address: str
    notes: str | None = None
    addons: list[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, booking: BookingRecord) -> "BookingSummary":
        return cls(
            id=booking.id,
            service_id=booking.service_id,
            provider_id=booking.provider_id,
            scheduled_at=booking.scheduled_at,
            duration=booking.duration_minutes,
            status=booking.status,
            payment_status=booking.payment_status,
            payment_type=booking.payment_type,
            total_amount=float(booking.total_amount),
            currency=booking.currency,
            customer_address=booking.customer_address,
            notes=booking.notes,
            addons=[addon.addon_id for addon in booking.addons],
        )


class BookingListResponse(CamelModel):
    success: bool = True
    bookings: list[BookingSummary]


class ConfirmBookingResponse(CamelModel):
    success: bool = True
    booking_id: str
    status: str
    already_confirmed: bool = False
