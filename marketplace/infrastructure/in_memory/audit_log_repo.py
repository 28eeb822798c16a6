import json
from dataclasses import replace
from datetime import datetime
from typing import Any, Sequence

from marketplace.application.interfaces.audit_log_repo import (
    AuditLogFilter,
    AuditLogRecord,
    AuditLogRepo,
)

_UPDATABLE_FIELDS = ("action", "resource_type", "resource_id", "changes")


class InMemoryAuditLogRepo(AuditLogRepo):
    def __init__(self) -> None:
        self.records: dict[str, AuditLogRecord] = {}

    async def add(self, record: AuditLogRecord) -> None:
        self.records[record.id] = replace(record)

    async def count(self, tenant_id: str, filters: AuditLogFilter) -> int:
        return len(self._matching(tenant_id, filters))

    async def list_page(
        self,
        tenant_id: str,
        filters: AuditLogFilter,
        offset: int,
        limit: int,
    ) -> Sequence[AuditLogRecord]:
        ordered = sorted(
            self._matching(tenant_id, filters),
            key=lambda record: record.created_at or datetime.min,
            reverse=True,
        )
        return [replace(record) for record in ordered[offset : offset + limit]]

    async def get(self, tenant_id: str, audit_log_id: str) -> AuditLogRecord | None:
        record = self.records.get(audit_log_id)
        if not record or record.tenant_id != tenant_id:
            return None
        return replace(record)

    async def update(
        self,
        tenant_id: str,
        audit_log_id: str,
        fields: dict[str, Any],
    ) -> AuditLogRecord | None:
        record = self.records.get(audit_log_id)
        if not record or record.tenant_id != tenant_id:
            return None
        for key, value in fields.items():
            if key in _UPDATABLE_FIELDS:
                setattr(record, key, value)
        return replace(record)

    async def delete(self, tenant_id: str, audit_log_id: str) -> bool:
        record = self.records.get(audit_log_id)
        if not record or record.tenant_id != tenant_id:
            return False
        del self.records[audit_log_id]
        return True

    async def delete_many(self, tenant_id: str, audit_log_ids: Sequence[str]) -> int:
        deleted = 0
        for audit_log_id in audit_log_ids:
            if await self.delete(tenant_id, audit_log_id):
                deleted += 1
        return deleted

    def _matching(self, tenant_id: str, filters: AuditLogFilter) -> list[AuditLogRecord]:
        result = []
        for record in self.records.values():
            if record.tenant_id != tenant_id:
                continue
            if filters.action and record.action != filters.action:
                continue
            if filters.resource_type and record.resource_type != filters.resource_type:
                continue
            if filters.user_id and record.user_id != filters.user_id:
                continue
            if filters.search:
                haystack = (record.resource_id or "") + " " + json.dumps(record.changes or {})
                if filters.search not in haystack:
                    continue
            result.append(record)
        return result
