from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Sequence

from marketplace.domain.entities.booking import BookingPaymentStatus, BookingStatus
from marketplace.domain.value_objects.datetime_range import DatetimeRange


@dataclass
class BookingAddonInput:
    addon_id: str
    price: Decimal


@dataclass
class BookingRecord:
    id: str
    tenant_id: str
    customer_id: str
    provider_id: str
    service_id: str
    scheduled_at: datetime
    duration_minutes: int
    payment_type: str
    total_amount: Decimal
    commission_amount: Decimal
    customer_address: str
    notes: str | None = None
    status: str = BookingStatus.PENDING.value
    payment_status: str = BookingPaymentStatus.PENDING.value
    currency: str = "SAR"
    created_at: datetime | None = None
    updated_at: datetime | None = None
    addons: list[BookingAddonInput] = field(default_factory=list)

    @property
    def interval(self) -> DatetimeRange:
        return DatetimeRange.from_duration(self.scheduled_at, self.duration_minutes)


class BookingRepo:
    async def create(self, booking: BookingRecord, addons: Sequence[BookingAddonInput]) -> None:
        raise NotImplementedError

    async def get(self, tenant_id: str, booking_id: str) -> BookingRecord | None:
        raise NotImplementedError

    async def list_blocking_for_provider(
        self,
        tenant_id: str,
        provider_id: str,
        day: date,
        for_update: bool = False,
    ) -> Sequence[BookingRecord]:
        """
        Reservas del proveedor ese día cuyo estado bloquea la agenda.

        Con ``for_update`` las filas quedan bloqueadas hasta el fin de la
        transacción, para que dos reservas no ocupen el mismo horario.
        """
        raise NotImplementedError

    async def list_for_customer(
        self,
        tenant_id: str,
        customer_id: str,
    ) -> Sequence[BookingRecord]:
        raise NotImplementedError

    async def update_status(self, booking_id: str, status: str, updated_at: datetime) -> None:
        raise NotImplementedError

    async def update_payment_status(
        self,
        booking_id: str,
        payment_status: str,
        updated_at: datetime,
    ) -> None:
        raise NotImplementedError
