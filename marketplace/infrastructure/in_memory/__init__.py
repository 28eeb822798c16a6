"""Implementaciones in-memory para desarrollo local y testing."""

from marketplace.infrastructure.in_memory.audit_log_repo import InMemoryAuditLogRepo
from marketplace.infrastructure.in_memory.booking_repo import InMemoryBookingRepo
from marketplace.infrastructure.in_memory.catalog_repo import InMemoryCatalogRepo
from marketplace.infrastructure.in_memory.idempotency_repo import InMemoryIdempotencyRepo
from marketplace.infrastructure.in_memory.notification_repo import InMemoryNotificationRepo
from marketplace.infrastructure.in_memory.payment_repo import InMemoryPaymentRepo
from marketplace.infrastructure.in_memory.transaction_manager import NoopTransactionManager
from marketplace.infrastructure.in_memory.user_repo import InMemoryUserRepo

__all__ = [
    # Repositories
    "InMemoryAuditLogRepo",
    "InMemoryBookingRepo",
    "InMemoryCatalogRepo",
    "InMemoryIdempotencyRepo",
    "InMemoryNotificationRepo",
    "InMemoryPaymentRepo",
    "InMemoryUserRepo",
    # Infrastructure
    "NoopTransactionManager",
]
