from dataclasses import replace
from datetime import date, datetime
from typing import Sequence

from marketplace.application.interfaces.booking_repo import (
    BookingAddonInput,
    BookingRecord,
    BookingRepo,
)
from marketplace.domain.entities.booking import is_blocking_status


class InMemoryBookingRepo(BookingRepo):
    def __init__(self) -> None:
        self.bookings: dict[str, BookingRecord] = {}

    async def create(self, booking: BookingRecord, addons: Sequence[BookingAddonInput]) -> None:
        if booking.id in self.bookings:
            raise ValueError("Booking id already exists")
        self.bookings[booking.id] = replace(booking, addons=list(addons))

    async def get(self, tenant_id: str, booking_id: str) -> BookingRecord | None:
        booking = self.bookings.get(booking_id)
        if not booking or booking.tenant_id != tenant_id:
            return None
        return replace(booking)

    async def list_blocking_for_provider(
        self,
        tenant_id: str,
        provider_id: str,
        day: date,
        for_update: bool = False,
    ) -> Sequence[BookingRecord]:
        return sorted(
            (
                replace(booking)
                for booking in self.bookings.values()
                if booking.tenant_id == tenant_id
                and booking.provider_id == provider_id
                and booking.scheduled_at.date() == day
                and is_blocking_status(booking.status)
            ),
            key=lambda booking: booking.scheduled_at,
        )

    async def list_for_customer(
        self,
        tenant_id: str,
        customer_id: str,
    ) -> Sequence[BookingRecord]:
        return sorted(
            (
                replace(booking)
                for booking in self.bookings.values()
                if booking.tenant_id == tenant_id and booking.customer_id == customer_id
            ),
            key=lambda booking: booking.scheduled_at,
            reverse=True,
        )

    async def update_status(self, booking_id: str, status: str, updated_at: datetime) -> None:
        if booking_id not in self.bookings:
            raise ValueError("Booking not found")
        self.bookings[booking_id].status = status
        self.bookings[booking_id].updated_at = updated_at

    async def update_payment_status(
        self,
        booking_id: str,
        payment_status: str,
        updated_at: datetime,
    ) -> None:
        if booking_id not in self.bookings:
            raise ValueError("Booking not found")
        self.bookings[booking_id].payment_status = payment_status
        self.bookings[booking_id].updated_at = updated_at
