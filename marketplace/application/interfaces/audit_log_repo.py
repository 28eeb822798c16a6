from dataclasses import dataclass
from datetime import datetime
from typing import Any, Sequence


@dataclass
class AuditLogRecord:
    id: str
    tenant_id: str
    user_id: str | None
    action: str
    resource_type: str
    resource_id: str | None = None
    changes: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime | None = None


@dataclass
class AuditLogFilter:
    action: str | None = None
    resource_type: str | None = None
    user_id: str | None = None
    search: str | None = None


class AuditLogRepo:
    async def add(self, record: AuditLogRecord) -> None:
        raise NotImplementedError

    async def count(self, tenant_id: str, filters: AuditLogFilter) -> int:
        raise NotImplementedError

    async def list_page(
        self,
        tenant_id: str,
        filters: AuditLogFilter,
        offset: int,
        limit: int,
    ) -> Sequence[AuditLogRecord]:
        """Registros del tenant, del más reciente al más antiguo."""
        raise NotImplementedError

    async def get(self, tenant_id: str, audit_log_id: str) -> AuditLogRecord | None:
        raise NotImplementedError

    async def update(
        self,
        tenant_id: str,
        audit_log_id: str,
        fields: dict[str, Any],
    ) -> AuditLogRecord | None:
        raise NotImplementedError

    async def delete(self, tenant_id: str, audit_log_id: str) -> bool:
        raise NotImplementedError

    async def delete_many(self, tenant_id: str, audit_log_ids: Sequence[str]) -> int:
        raise NotImplementedError
