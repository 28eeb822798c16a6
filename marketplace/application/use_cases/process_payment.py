import json
import logging

from fastapi import status

from marketplace.api.schemas.payments import CreatePaymentRequest, CreatePaymentResponse
from marketplace.application.dtos.request_context import RequestContext
from marketplace.application.interfaces.audit_log_repo import AuditLogRecord, AuditLogRepo
from marketplace.application.interfaces.booking_repo import BookingRepo
from marketplace.application.interfaces.card_gateway import CardGateway
from marketplace.application.interfaces.clock import Clock
from marketplace.application.interfaces.id_generator import IdGenerator
from marketplace.application.interfaces.idempotency_repo import IdempotencyRecord, IdempotencyRepo
from marketplace.application.interfaces.payment_repo import PaymentRecord, PaymentRepo
from marketplace.application.interfaces.transaction_manager import TransactionManager
from marketplace.application.use_cases._hashing import hash_request
from marketplace.domain.constants import (
    AUDIT_ACTION_PAYMENT_CREATE,
    AUDIT_RESOURCE_PAYMENT,
    IDEMPOTENCY_SCOPE_PAYMENT_CREATE,
)
from marketplace.domain.entities.booking import BookingPaymentStatus
from marketplace.domain.entities.payment import PaymentStatus
from marketplace.domain.errors import (
    AmountMismatchError,
    BookingNotFoundError,
    DuplicatePaymentError,
    IdempotencyConflictError,
    PaymentDeclinedError,
)
from marketplace.domain.value_objects.money import Money


class ProcessPaymentUseCase:
    def __init__(
        self,
        booking_repo: BookingRepo,
        payment_repo: PaymentRepo,
        audit_log_repo: AuditLogRepo,
        idempotency_repo: IdempotencyRepo,
        card_gateway: CardGateway,
        transaction_manager: TransactionManager,
        clock: Clock,
        id_generator: IdGenerator,
    ) -> None:
        self._booking_repo = booking_repo
        self._payment_repo = payment_repo
        self._audit_log_repo = audit_log_repo
        self._idempotency_repo = idempotency_repo
        self._card_gateway = card_gateway
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._id_generator = id_generator
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        context: RequestContext,
        request: CreatePaymentRequest,
        idem_key: str | None = None,
    ) -> CreatePaymentResponse:
        scope = IDEMPOTENCY_SCOPE_PAYMENT_CREATE
        req_hash = hash_request(
            {
                "tenant_id": context.tenant_id,
                "customer_id": context.user_id,
                **request.model_dump(),
            }
        )

        async with self._transaction_manager.start():
            if idem_key:
                existing = await self._idempotency_repo.get(scope=scope, idem_key=idem_key)
                if existing:
                    if existing.request_hash != req_hash:
                        raise IdempotencyConflictError(idem_key, scope)
                    return CreatePaymentResponse.model_validate(existing.response_json)

            booking = await self._booking_repo.get(context.tenant_id, request.booking_id)
            if not booking or booking.customer_id != context.user_id:
                raise BookingNotFoundError(request.booking_id)

            total = Money(amount=booking.total_amount, currency_code=booking.currency)
            if request.amount is not None and not total.matches(request.amount):
                raise AmountMismatchError(expected=str(total.amount), received=str(request.amount))

            payments = await self._payment_repo.list_by_booking(booking.id)
            if any(PaymentStatus(payment.status).is_active for payment in payments):
                raise DuplicatePaymentError(booking.id)

            payment_id = self._id_generator.new_id()
            result = await self._card_gateway.charge(
                payment_id=payment_id,
                amount=total.amount,
                currency=total.currency_code,
                gateway_reference=request.payment_gateway_reference,
            )
            if result.declined:
                self._logger.warning(
                    "Payment declined",
                    extra={
                        "booking_id": booking.id,
                        "gateway_reference": request.payment_gateway_reference,
                        "reason": result.decline_reason,
                    },
                )
                raise PaymentDeclinedError(booking.id, result.decline_reason or "Payment declined")

            now = self._clock.now()
            payment = PaymentRecord(
                id=payment_id,
                tenant_id=context.tenant_id,
                booking_id=booking.id,
                customer_id=booking.customer_id,
                amount=total.amount,
                currency=total.currency_code,
                payment_method=request.payment_method.value,
                status=result.status,
                transaction_ref=result.transaction_ref,
                gateway_reference=request.payment_gateway_reference,
                created_at=now,
            )
            await self._payment_repo.create(payment)
            if result.status == PaymentStatus.COMPLETED.value:
                await self._booking_repo.update_payment_status(
                    booking_id=booking.id,
                    payment_status=BookingPaymentStatus.PAID.value,
                    updated_at=now,
                )
            await self._audit_log_repo.add(
                AuditLogRecord(
                    id=self._id_generator.new_id(),
                    tenant_id=context.tenant_id,
                    user_id=context.user_id,
                    action=AUDIT_ACTION_PAYMENT_CREATE,
                    resource_type=AUDIT_RESOURCE_PAYMENT,
                    resource_id=payment_id,
                    changes={
                        "bookingId": booking.id,
                        "amount": str(total.amount),
                        "paymentMethod": payment.payment_method,
                        "status": payment.status,
                        "transactionRef": payment.transaction_ref,
                    },
                    ip_address=context.ip_address,
                    user_agent=context.user_agent,
                    created_at=now,
                )
            )

            response = CreatePaymentResponse(
                payment_id=payment_id,
                transaction_ref=payment.transaction_ref,
                status=payment.status,
            )
            if idem_key:
                await self._idempotency_repo.save(
                    IdempotencyRecord(
                        scope=scope,
                        idem_key=idem_key,
                        request_hash=req_hash,
                        response_json=json.loads(response.model_dump_json()),
                        http_status=status.HTTP_201_CREATED,
                        tenant_id=context.tenant_id,
                        reference_booking_id=booking.id,
                    )
                )
            self._logger.info(
                "Payment recorded",
                extra={
                    "booking_id": booking.id,
                    "payment_id": payment_id,
                    "status": payment.status,
                    "transaction_ref": payment.transaction_ref,
                },
            )
            return response
