from functools import lru_cache

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.api.deps import AsyncSessionLocal
from marketplace.application.dtos import RequestContext
from marketplace.application.interfaces.clock import SystemClock
from marketplace.application.interfaces.id_generator import UUIDGenerator
from marketplace.application.use_cases.confirm_booking import ConfirmBookingUseCase
from marketplace.application.use_cases.create_booking import CreateBookingUseCase
from marketplace.application.use_cases.get_available_slots import GetAvailableSlotsUseCase
from marketplace.application.use_cases.get_service_details import GetServiceDetailsUseCase
from marketplace.application.use_cases.list_customer_bookings import ListCustomerBookingsUseCase
from marketplace.application.use_cases.manage_audit_logs import (
    CreateAuditLogUseCase,
    DeleteAuditLogsUseCase,
    DeleteAuditLogUseCase,
    GetAuditLogUseCase,
    ListAuditLogsUseCase,
    UpdateAuditLogUseCase,
)
from marketplace.application.use_cases.process_payment import ProcessPaymentUseCase
from marketplace.application.use_cases.profile import GetProfileUseCase, UpdateProfileUseCase
from marketplace.config import Settings, get_settings
from marketplace.domain.errors import InvalidTenantError
from marketplace.infrastructure.db.repositories.audit_log_repo_sql import AuditLogRepoSQL
from marketplace.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from marketplace.infrastructure.db.repositories.catalog_repo_sql import CatalogRepoSQL
from marketplace.infrastructure.db.repositories.idempotency_repo_sql import IdempotencyRepoSQL
from marketplace.infrastructure.db.repositories.notification_repo_sql import NotificationRepoSQL
from marketplace.infrastructure.db.repositories.payment_repo_sql import PaymentRepoSQL
from marketplace.infrastructure.db.repositories.user_repo_sql import UserRepoSQL
from marketplace.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from marketplace.infrastructure.gateways.sandbox_card_gateway import SandboxCardGateway
from marketplace.infrastructure.in_memory import (
    InMemoryAuditLogRepo,
    InMemoryBookingRepo,
    InMemoryCatalogRepo,
    InMemoryIdempotencyRepo,
    InMemoryNotificationRepo,
    InMemoryPaymentRepo,
    InMemoryUserRepo,
    NoopTransactionManager,
)


async def get_session(settings: Settings = Depends(get_settings)) -> AsyncSession | None:
    if settings.use_in_memory:
        yield None
        return
    async with AsyncSessionLocal() as session:
        yield session


@lru_cache(maxsize=1)
def _in_memory_bundle():
    return {
        "catalog_repo": InMemoryCatalogRepo(),
        "booking_repo": InMemoryBookingRepo(),
        "payment_repo": InMemoryPaymentRepo(),
        "user_repo": InMemoryUserRepo(),
        "audit_log_repo": InMemoryAuditLogRepo(),
        "notification_repo": InMemoryNotificationRepo(),
        "idempotency_repo": InMemoryIdempotencyRepo(),
        "tx_manager": NoopTransactionManager(),
        "clock": SystemClock(),
        "id_generator": UUIDGenerator(),
    }


def _build_use_cases(settings: Settings, bundle: dict) -> dict:
    card_gateway = SandboxCardGateway(mode=settings.payment_mode)
    tx_manager = bundle["tx_manager"]
    clock = bundle["clock"]
    id_generator = bundle["id_generator"]

    return {
        "get_service_details": GetServiceDetailsUseCase(catalog_repo=bundle["catalog_repo"]),
        "get_available_slots": GetAvailableSlotsUseCase(
            catalog_repo=bundle["catalog_repo"],
            booking_repo=bundle["booking_repo"],
            start_hour=settings.working_hours_start,
            end_hour=settings.working_hours_end,
            step_minutes=settings.slot_interval_minutes,
            default_duration_minutes=settings.default_service_duration_minutes,
        ),
        "list_bookings": ListCustomerBookingsUseCase(booking_repo=bundle["booking_repo"]),
        "create_booking": CreateBookingUseCase(
            catalog_repo=bundle["catalog_repo"],
            booking_repo=bundle["booking_repo"],
            audit_log_repo=bundle["audit_log_repo"],
            idempotency_repo=bundle["idempotency_repo"],
            transaction_manager=tx_manager,
            clock=clock,
            id_generator=id_generator,
            default_duration_minutes=settings.default_service_duration_minutes,
        ),
        "confirm_booking": ConfirmBookingUseCase(
            booking_repo=bundle["booking_repo"],
            catalog_repo=bundle["catalog_repo"],
            notification_repo=bundle["notification_repo"],
            audit_log_repo=bundle["audit_log_repo"],
            transaction_manager=tx_manager,
            clock=clock,
            id_generator=id_generator,
        ),
        "process_payment": ProcessPaymentUseCase(
            booking_repo=bundle["booking_repo"],
            payment_repo=bundle["payment_repo"],
            audit_log_repo=bundle["audit_log_repo"],
            idempotency_repo=bundle["idempotency_repo"],
            card_gateway=card_gateway,
            transaction_manager=tx_manager,
            clock=clock,
            id_generator=id_generator,
        ),
        "get_profile": GetProfileUseCase(user_repo=bundle["user_repo"]),
        "update_profile": UpdateProfileUseCase(
            user_repo=bundle["user_repo"],
            transaction_manager=tx_manager,
        ),
        "list_audit_logs": ListAuditLogsUseCase(audit_log_repo=bundle["audit_log_repo"]),
        "create_audit_log": CreateAuditLogUseCase(
            audit_log_repo=bundle["audit_log_repo"],
            transaction_manager=tx_manager,
            clock=clock,
            id_generator=id_generator,
        ),
        "get_audit_log": GetAuditLogUseCase(audit_log_repo=bundle["audit_log_repo"]),
        "update_audit_log": UpdateAuditLogUseCase(
            audit_log_repo=bundle["audit_log_repo"],
            transaction_manager=tx_manager,
        ),
        "delete_audit_log": DeleteAuditLogUseCase(
            audit_log_repo=bundle["audit_log_repo"],
            transaction_manager=tx_manager,
        ),
        "delete_audit_logs": DeleteAuditLogsUseCase(
            audit_log_repo=bundle["audit_log_repo"],
            transaction_manager=tx_manager,
        ),
    }


def get_use_cases(
    settings: Settings = Depends(get_settings),
    session: AsyncSession | None = Depends(get_session),
):
    if settings.use_in_memory:
        return _build_use_cases(settings, _in_memory_bundle())

    if not session:
        raise RuntimeError("DB session not available")

    bundle = {
        "catalog_repo": CatalogRepoSQL(session),
        "booking_repo": BookingRepoSQL(session),
        "payment_repo": PaymentRepoSQL(session),
        "user_repo": UserRepoSQL(session),
        "audit_log_repo": AuditLogRepoSQL(session),
        "notification_repo": NotificationRepoSQL(session),
        "idempotency_repo": IdempotencyRepoSQL(session),
        "tx_manager": SQLAlchemyTransactionManager(session),
        "clock": SystemClock(),
        "id_generator": UUIDGenerator(),
    }
    return _build_use_cases(settings, bundle)


# Identidad
#
# La autenticación vive fuera de este servicio; el gateway reenvía la
# identidad ya verificada en cabeceras.


def _client_meta(request: Request) -> tuple[str | None, str | None]:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        ip_address = forwarded.split(",")[0].strip()
    else:
        ip_address = request.client.host if request.client else None
    return ip_address, request.headers.get("User-Agent")


def get_tenant_context(
    request: Request,
    tenant_id: str | None = Header(default=None, convert_underscores=False, alias="X-Tenant-Id"),
) -> RequestContext:
    if not tenant_id:
        raise InvalidTenantError()
    ip_address, user_agent = _client_meta(request)
    return RequestContext(tenant_id=tenant_id, ip_address=ip_address, user_agent=user_agent)


def get_customer_context(
    context: RequestContext = Depends(get_tenant_context),
    user_id: str | None = Header(default=None, convert_underscores=False, alias="X-User-Id"),
    role: str | None = Header(default=None, convert_underscores=False, alias="X-User-Role"),
) -> RequestContext:
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return RequestContext(
        tenant_id=context.tenant_id,
        user_id=user_id,
        role=role or "customer",
        ip_address=context.ip_address,
        user_agent=context.user_agent,
    )


def get_admin_context(context: RequestContext = Depends(get_customer_context)) -> RequestContext:
    if not context.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden",
        )
    return context
