from dataclasses import dataclass
from decimal import Decimal


@dataclass
class CardChargeResult:
    status: str
    transaction_ref: str
    decline_reason: str | None = None

    @property
    def declined(self) -> bool:
        return self.status == "failed"


class CardGateway:
    async def charge(
        self,
        payment_id: str,
        amount: Decimal,
        currency: str,
        gateway_reference: str | None,
    ) -> CardChargeResult:
        raise NotImplementedError
