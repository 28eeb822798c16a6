from collections import defaultdict
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Sequence

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.application.interfaces.booking_repo import (
    BookingAddonInput,
    BookingRecord,
    BookingRepo,
)
from marketplace.domain.entities.booking import NON_BLOCKING_STATUSES
from marketplace.infrastructure.db.tables import booking_addons, bookings


class BookingRepoSQL(BookingRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, booking: BookingRecord, addons: Sequence[BookingAddonInput]) -> None:
        stmt = insert(bookings).values(
            id=booking.id,
            tenant_id=booking.tenant_id,
            customer_id=booking.customer_id,
            provider_id=booking.provider_id,
            service_id=booking.service_id,
            scheduled_at=booking.scheduled_at,
            duration_minutes=booking.duration_minutes,
            status=booking.status,
            payment_status=booking.payment_status,
            payment_type=booking.payment_type,
            total_amount=booking.total_amount,
            commission_amount=booking.commission_amount,
            currency=booking.currency,
            customer_address=booking.customer_address,
            notes=booking.notes,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )
        await self._session.execute(stmt)
        if addons:
            await self._session.execute(
                insert(booking_addons),
                [
                    {"booking_id": booking.id, "addon_id": addon.addon_id, "price": addon.price}
                    for addon in addons
                ],
            )
        booking.addons = list(addons)

    async def get(self, tenant_id: str, booking_id: str) -> BookingRecord | None:
        stmt = select(bookings).where(
            bookings.c.id == booking_id,
            bookings.c.tenant_id == tenant_id,
        )
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        addons = await self._load_addons([row["id"]])
        return self._map_booking(row, addons.get(row["id"], []))

    async def list_blocking_for_provider(
        self,
        tenant_id: str,
        provider_id: str,
        day: date,
        for_update: bool = False,
    ) -> Sequence[BookingRecord]:
        day_start = datetime.combine(day, time.min)
        stmt = (
            select(bookings)
            .where(
                bookings.c.tenant_id == tenant_id,
                bookings.c.provider_id == provider_id,
                bookings.c.scheduled_at >= day_start,
                bookings.c.scheduled_at < day_start + timedelta(days=1),
                bookings.c.status.not_in(sorted(NON_BLOCKING_STATUSES)),
            )
            .order_by(bookings.c.scheduled_at)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        return [self._map_booking(row, []) for row in result.mappings().all()]

    async def list_for_customer(
        self,
        tenant_id: str,
        customer_id: str,
    ) -> Sequence[BookingRecord]:
        stmt = (
            select(bookings)
            .where(
                bookings.c.tenant_id == tenant_id,
                bookings.c.customer_id == customer_id,
            )
            .order_by(bookings.c.scheduled_at.desc())
        )
        result = await self._session.execute(stmt)
        rows = result.mappings().all()
        addons = await self._load_addons([row["id"] for row in rows])
        return [self._map_booking(row, addons.get(row["id"], [])) for row in rows]

    async def update_status(self, booking_id: str, status: str, updated_at: datetime) -> None:
        stmt = (
            update(bookings)
            .where(bookings.c.id == booking_id)
            .values(status=status, updated_at=updated_at)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise ValueError("Booking not found")

    async def update_payment_status(
        self,
        booking_id: str,
        payment_status: str,
        updated_at: datetime,
    ) -> None:
        stmt = (
            update(bookings)
            .where(bookings.c.id == booking_id)
            .values(payment_status=payment_status, updated_at=updated_at)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise ValueError("Booking not found")

    async def _load_addons(self, booking_ids: list[str]) -> dict[str, list[BookingAddonInput]]:
        grouped: dict[str, list[BookingAddonInput]] = defaultdict(list)
        if not booking_ids:
            return grouped
        stmt = (
            select(booking_addons)
            .where(booking_addons.c.booking_id.in_(booking_ids))
            .order_by(booking_addons.c.id)
        )
        result = await self._session.execute(stmt)
        for row in result.mappings().all():
            grouped[row["booking_id"]].append(
                BookingAddonInput(addon_id=row["addon_id"], price=Decimal(str(row["price"])))
            )
        return grouped

    def _map_booking(self, row, addons: list[BookingAddonInput]) -> BookingRecord:
        return BookingRecord(
            id=row["id"],
            tenant_id=row["tenant_id"],
            customer_id=row["customer_id"],
            provider_id=row["provider_id"],
            service_id=row["service_id"],
            scheduled_at=row["scheduled_at"],
            duration_minutes=row["duration_minutes"],
            payment_type=row["payment_type"],
            total_amount=Decimal(str(row["total_amount"])),
            commission_amount=Decimal(str(row["commission_amount"])),
            customer_address=row["customer_address"],
            notes=row.get("notes"),
            status=row["status"],
            payment_status=row["payment_status"],
            currency=row["currency"],
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
            addons=addons,
        )
