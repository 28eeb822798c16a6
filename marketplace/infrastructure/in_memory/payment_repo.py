from collections import defaultdict
from typing import Sequence

from marketplace.application.interfaces.payment_repo import PaymentRecord, PaymentRepo


class InMemoryPaymentRepo(PaymentRepo):
    def __init__(self) -> None:
        self._by_id: dict[str, PaymentRecord] = {}
        self._by_booking: dict[str, list[str]] = defaultdict(list)

    async def create(self, payment: PaymentRecord) -> None:
        self._by_id[payment.id] = payment
        self._by_booking[payment.booking_id].append(payment.id)

    async def list_by_booking(self, booking_id: str) -> Sequence[PaymentRecord]:
        return [self._by_id[pid] for pid in self._by_booking.get(booking_id, [])]
