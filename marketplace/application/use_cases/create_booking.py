import json
import logging
from decimal import Decimal

from fastapi import status

from marketplace.api.schemas.bookings import CreateBookingRequest, CreateBookingResponse
from marketplace.application.dtos.request_context import RequestContext
from marketplace.application.interfaces.audit_log_repo import AuditLogRecord, AuditLogRepo
from marketplace.application.interfaces.booking_repo import (
    BookingAddonInput,
    BookingRecord,
    BookingRepo,
)
from marketplace.application.interfaces.catalog_repo import CatalogRepo
from marketplace.application.interfaces.clock import Clock
from marketplace.application.interfaces.id_generator import IdGenerator
from marketplace.application.interfaces.idempotency_repo import (
    IdempotencyRecord,
    IdempotencyRepo,
)
from marketplace.application.interfaces.transaction_manager import TransactionManager
from marketplace.application.use_cases._hashing import hash_request
from marketplace.domain.constants import (
    AUDIT_ACTION_BOOKING_CREATE,
    AUDIT_RESOURCE_BOOKING,
    IDEMPOTENCY_SCOPE_BOOKING_CREATE,
)
from marketplace.domain.entities.booking import BookingPaymentStatus, BookingStatus
from marketplace.domain.errors import (
    IdempotencyConflictError,
    RequiredAddonMissingError,
    ServiceNotFoundError,
    SlotUnavailableError,
)
from marketplace.domain.pricing import calculate_total, missing_required_addons
from marketplace.domain.scheduling import DEFAULT_DURATION_MINUTES, is_slot_free


class CreateBookingUseCase:
    def __init__(
        self,
        catalog_repo: CatalogRepo,
        booking_repo: BookingRepo,
        audit_log_repo: AuditLogRepo,
        idempotency_repo: IdempotencyRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
        id_generator: IdGenerator,
        default_duration_minutes: int = DEFAULT_DURATION_MINUTES,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._booking_repo = booking_repo
        self._audit_log_repo = audit_log_repo
        self._idempotency_repo = idempotency_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._id_generator = id_generator
        self._default_duration = default_duration_minutes
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        context: RequestContext,
        request: CreateBookingRequest,
        idem_key: str | None = None,
    ) -> CreateBookingResponse:
        scope = IDEMPOTENCY_SCOPE_BOOKING_CREATE
        request_hash = hash_request(
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
                    if existing.request_hash != request_hash:
                        raise IdempotencyConflictError(idem_key, scope)
                    return CreateBookingResponse.model_validate(existing.response_json)

            service = await self._catalog_repo.get_active_service(
                context.tenant_id, request.service_id
            )
            if not service or service.provider_id != request.provider_id:
                raise ServiceNotFoundError(
                    request.service_id, message="Service not found or not available"
                )

            missing = missing_required_addons(service.addons, request.addons)
            if missing:
                raise RequiredAddonMissingError(missing)

            duration = service.duration_minutes or self._default_duration
            scheduled_at = request.scheduled_at
            blocking = await self._booking_repo.list_blocking_for_provider(
                context.tenant_id, service.provider_id, scheduled_at.date(), for_update=True
            )
            if not is_slot_free(scheduled_at, duration, [b.interval for b in blocking]):
                raise SlotUnavailableError(scheduled_at.isoformat())

            total = calculate_total(
                service.price, service.addons, request.addons, service.currency
            )
            provider = await self._catalog_repo.get_provider(service.provider_id)
            commission_rate = provider.commission_rate if provider else Decimal("0")
            commission = total.percentage(commission_rate)

            now = self._clock.now()
            booking_id = self._id_generator.new_id()
            selected = set(request.addons)
            addon_rows = [
                BookingAddonInput(addon_id=addon.id, price=addon.price)
                for addon in service.addons
                if addon.id in selected
            ]
            booking = BookingRecord(
                id=booking_id,
                tenant_id=context.tenant_id,
                customer_id=context.user_id,
                provider_id=service.provider_id,
                service_id=service.id,
                scheduled_at=scheduled_at,
                duration_minutes=duration,
                payment_type=request.payment_type.value,
                total_amount=total.amount,
                commission_amount=commission.amount,
                customer_address=request.customer_address,
                notes=request.notes,
                status=BookingStatus.PENDING.value,
                payment_status=BookingPaymentStatus.PENDING.value,
                currency=service.currency,
                created_at=now,
                updated_at=now,
            )
            await self._booking_repo.create(booking, addon_rows)
            await self._audit_log_repo.add(
                AuditLogRecord(
                    id=self._id_generator.new_id(),
                    tenant_id=context.tenant_id,
                    user_id=context.user_id,
                    action=AUDIT_ACTION_BOOKING_CREATE,
                    resource_type=AUDIT_RESOURCE_BOOKING,
                    resource_id=booking_id,
                    changes={
                        "serviceId": service.id,
                        "providerId": service.provider_id,
                        "scheduledAt": scheduled_at.isoformat(),
                        "totalAmount": str(total.amount),
                        "paymentType": request.payment_type.value,
                    },
                    ip_address=context.ip_address,
                    user_agent=context.user_agent,
                    created_at=now,
                )
            )

            response = CreateBookingResponse(
                booking_id=booking_id,
                total_amount=float(total.amount),
                status=booking.status,
                payment_status=booking.payment_status,
            )

            if idem_key:
                await self._idempotency_repo.save(
                    IdempotencyRecord(
                        scope=scope,
                        idem_key=idem_key,
                        request_hash=request_hash,
                        response_json=json.loads(response.model_dump_json()),
                        http_status=status.HTTP_201_CREATED,
                        tenant_id=context.tenant_id,
                        reference_booking_id=booking_id,
                    )
                )

        self._logger.info(
            "Booking created",
            extra={
                "booking_id": booking_id,
                "tenant_id": context.tenant_id,
                "provider_id": service.provider_id,
                "scheduled_at": scheduled_at.isoformat(),
                "payment_type": request.payment_type.value,
                "total_amount": str(total.amount),
            },
        )
        return response
