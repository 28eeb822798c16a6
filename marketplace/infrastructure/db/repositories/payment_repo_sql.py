from decimal import Decimal
from typing import Sequence

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.application.interfaces.payment_repo import PaymentRecord, PaymentRepo
from marketplace.infrastructure.db.tables import payments


class PaymentRepoSQL(PaymentRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, payment: PaymentRecord) -> None:
        stmt = insert(payments).values(
            id=payment.id,
            tenant_id=payment.tenant_id,
            booking_id=payment.booking_id,
            customer_id=payment.customer_id,
            amount=payment.amount,
            currency=payment.currency,
            payment_method=payment.payment_method,
            status=payment.status,
            transaction_ref=payment.transaction_ref,
            payment_gateway_reference=payment.gateway_reference,
            created_at=payment.created_at,
        )
        await self._session.execute(stmt)

    async def list_by_booking(self, booking_id: str) -> Sequence[PaymentRecord]:
        stmt = (
            select(payments)
            .where(payments.c.booking_id == booking_id)
            .order_by(payments.c.created_at)
            .with_for_update()
        )
        result = await self._session.execute(stmt)
        return [self._map_payment(row) for row in result.mappings().all()]

    def _map_payment(self, row) -> PaymentRecord:
        return PaymentRecord(
            id=row["id"],
            tenant_id=row["tenant_id"],
            booking_id=row["booking_id"],
            customer_id=row["customer_id"],
            amount=Decimal(str(row["amount"])),
            currency=row["currency"],
            payment_method=row["payment_method"],
            status=row["status"],
            transaction_ref=row["transaction_ref"],
            gateway_reference=row.get("payment_gateway_reference"),
            created_at=row.get("created_at"),
        )
