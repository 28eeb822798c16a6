from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Sequence


@dataclass
class PaymentRecord:
    id: str
    tenant_id: str
    booking_id: str
    customer_id: str
    amount: Decimal
    currency: str
    payment_method: str
    status: str
    transaction_ref: str
    gateway_reference: str | None = None
    created_at: datetime | None = None


class PaymentRepo:
    async def create(self, payment: PaymentRecord) -> None:
        raise NotImplementedError

    async def list_by_booking(self, booking_id: str) -> Sequence[PaymentRecord]:
        raise NotImplementedError
