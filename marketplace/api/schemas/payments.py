from decimal import Decimal

from pydantic import Field

from marketplace.api.schemas.common import CamelModel, CamelRequest
from marketplace.domain.entities.payment import PaymentMethod


class CreatePaymentRequest(CamelRequest):
    booking_id: str = Field(min_length=1)
    payment_method: PaymentMethod = PaymentMethod.CARD
    payment_gateway_reference: str | None = Field(default=None, max_length=100)
    amount: Decimal | None = Field(default=None, ge=0)


class CreatePaymentResponse(CamelModel):
    success: bool = True
    payment_id: str
    transaction_ref: str
    status: str
