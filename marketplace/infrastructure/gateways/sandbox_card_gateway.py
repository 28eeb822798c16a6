import logging
from decimal import Decimal

from marketplace.application.interfaces.card_gateway import CardChargeResult, CardGateway
from marketplace.domain.entities.payment import PaymentStatus

logger = logging.getLogger(__name__)

# Referencia de tarjeta de prueba que el sandbox siempre rechaza.
DECLINED_REFERENCE_SUFFIX = "0002"


class SandboxCardGateway(CardGateway):
    """
    Gateway de tarjetas sin red.

    - sandbox: completa el cargo al instante salvo que la referencia termine en "0002".
    - production: deja el pago en pending hasta que el procesador real lo confirme.
    """

    def __init__(self, mode: str = "sandbox") -> None:
        if mode not in ("sandbox", "production"):
            raise ValueError(f"Unsupported payment mode: {mode}")
        self.mode = mode

    async def charge(
        self,
        payment_id: str,
        amount: Decimal,
        currency: str,
        gateway_reference: str | None,
    ) -> CardChargeResult:
        if self.mode == "production":
            return CardChargeResult(
                status=PaymentStatus.PENDING.value,
                transaction_ref=f"PROD_{payment_id[:12].upper()}",
            )

        if gateway_reference and gateway_reference.endswith(DECLINED_REFERENCE_SUFFIX):
            logger.info(
                "Sandbox charge declined",
                extra={"payment_id": payment_id, "amount": str(amount), "currency": currency},
            )
            return CardChargeResult(
                status=PaymentStatus.FAILED.value,
                transaction_ref=f"TEST_{payment_id[:12].upper()}",
                decline_reason="Card declined",
            )

        return CardChargeResult(
            status=PaymentStatus.COMPLETED.value,
            transaction_ref=f"TEST_{payment_id[:12].upper()}",
        )
