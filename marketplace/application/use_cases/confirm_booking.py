import logging

from marketplace.api.schemas.bookings import ConfirmBookingResponse
from marketplace.application.dtos.request_context import RequestContext
from marketplace.application.interfaces.audit_log_repo import AuditLogRecord, AuditLogRepo
from marketplace.application.interfaces.booking_repo import BookingRepo
from marketplace.application.interfaces.catalog_repo import CatalogRepo
from marketplace.application.interfaces.clock import Clock
from marketplace.application.interfaces.id_generator import IdGenerator
from marketplace.application.interfaces.notification_repo import (
    NotificationRecord,
    NotificationRepo,
)
from marketplace.application.interfaces.transaction_manager import TransactionManager
from marketplace.domain.constants import (
    AUDIT_ACTION_BOOKING_CONFIRM,
    AUDIT_RESOURCE_BOOKING,
    NOTIFICATION_NEW_BOOKING,
)
from marketplace.domain.entities.booking import BookingPaymentStatus, BookingStatus, PaymentType
from marketplace.domain.errors import (
    BookingNotFoundError,
    InvalidBookingStatusError,
    PaymentNotCompletedError,
)


class ConfirmBookingUseCase:
    """
    Confirma una reserva pendiente y avisa al proveedor.

    Confirmar una reserva ya confirmada no es un error: se responde con
    ``already_confirmed=True`` y no se vuelve a notificar.
    """

    def __init__(
        self,
        booking_repo: BookingRepo,
        catalog_repo: CatalogRepo,
        notification_repo: NotificationRepo,
        audit_log_repo: AuditLogRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
        id_generator: IdGenerator,
    ) -> None:
        self._booking_repo = booking_repo
        self._catalog_repo = catalog_repo
        self._notification_repo = notification_repo
        self._audit_log_repo = audit_log_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._id_generator = id_generator
        self._logger = logging.getLogger(__name__)

    async def execute(self, context: RequestContext, booking_id: str) -> ConfirmBookingResponse:
        async with self._transaction_manager.start():
            booking = await self._booking_repo.get(context.tenant_id, booking_id)
            if not booking:
                raise BookingNotFoundError(booking_id)

            provider = await self._catalog_repo.get_provider(booking.provider_id)
            allowed = (
                context.is_admin
                or booking.customer_id == context.user_id
                or (provider is not None and provider.user_id == context.user_id)
            )
            if not allowed:
                raise BookingNotFoundError(booking_id)

            if booking.status == BookingStatus.CONFIRMED.value:
                return ConfirmBookingResponse(
                    booking_id=booking.id,
                    status=booking.status,
                    already_confirmed=True,
                )
            if booking.status != BookingStatus.PENDING.value:
                raise InvalidBookingStatusError(booking.id, booking.status, "confirm")
            if (
                booking.payment_type == PaymentType.INSTANT.value
                and booking.payment_status != BookingPaymentStatus.PAID.value
            ):
                raise PaymentNotCompletedError(booking.id)

            now = self._clock.now()
            await self._booking_repo.update_status(
                booking_id=booking.id,
                status=BookingStatus.CONFIRMED.value,
                updated_at=now,
            )
            if provider:
                await self._notification_repo.create(
                    NotificationRecord(
                        id=self._id_generator.new_id(),
                        tenant_id=context.tenant_id,
                        user_id=provider.user_id,
                        type=NOTIFICATION_NEW_BOOKING,
                        title="New booking",
                        message="You have received a new booking",
                        data={"booking_id": booking.id},
                        created_at=now,
                    )
                )
            await self._audit_log_repo.add(
                AuditLogRecord(
                    id=self._id_generator.new_id(),
                    tenant_id=context.tenant_id,
                    user_id=context.user_id,
                    action=AUDIT_ACTION_BOOKING_CONFIRM,
                    resource_type=AUDIT_RESOURCE_BOOKING,
                    resource_id=booking.id,
                    changes={"status": BookingStatus.CONFIRMED.value},
                    ip_address=context.ip_address,
                    user_agent=context.user_agent,
                    created_at=now,
                )
            )

        self._logger.info(
            "Booking confirmed",
            extra={"booking_id": booking.id, "provider_id": booking.provider_id},
        )
        return ConfirmBookingResponse(
            booking_id=booking.id,
            status=BookingStatus.CONFIRMED.value,
        )
