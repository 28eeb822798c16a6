from typing import Any, Sequence

from sqlalchemy import String, cast, delete, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.application.interfaces.audit_log_repo import (
    AuditLogFilter,
    AuditLogRecord,
    AuditLogRepo,
)
from marketplace.infrastructure.db.tables import audit_logs

_UPDATABLE_COLUMNS = ("action", "resource_type", "resource_id", "changes")


class AuditLogRepoSQL(AuditLogRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, record: AuditLogRecord) -> None:
        stmt = insert(audit_logs).values(
            id=record.id,
            tenant_id=record.tenant_id,
            user_id=record.user_id,
            action=record.action,
            resource_type=record.resource_type,
            resource_id=record.resource_id,
            changes=record.changes,
            ip_address=record.ip_address,
            user_agent=record.user_agent,
            created_at=record.created_at,
        )
        await self._session.execute(stmt)

    async def count(self, tenant_id: str, filters: AuditLogFilter) -> int:
        stmt = select(func.count()).select_from(audit_logs).where(*self._conditions(tenant_id, filters))
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def list_page(
        self,
        tenant_id: str,
        filters: AuditLogFilter,
        offset: int,
        limit: int,
    ) -> Sequence[AuditLogRecord]:
        stmt = (
            select(audit_logs)
            .where(*self._conditions(tenant_id, filters))
            .order_by(audit_logs.c.created_at.desc(), audit_logs.c.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._map_record(row) for row in result.mappings().all()]

    async def get(self, tenant_id: str, audit_log_id: str) -> AuditLogRecord | None:
        stmt = select(audit_logs).where(
            audit_logs.c.id == audit_log_id,
            audit_logs.c.tenant_id == tenant_id,
        )
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return self._map_record(row) if row else None

    async def update(
        self,
        tenant_id: str,
        audit_log_id: str,
        fields: dict[str, Any],
    ) -> AuditLogRecord | None:
        values = {key: value for key, value in fields.items() if key in _UPDATABLE_COLUMNS}
        if not values:
            return await self.get(tenant_id, audit_log_id)
        stmt = (
            update(audit_logs)
            .where(audit_logs.c.id == audit_log_id, audit_logs.c.tenant_id == tenant_id)
            .values(**values)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get(tenant_id, audit_log_id)

    async def delete(self, tenant_id: str, audit_log_id: str) -> bool:
        stmt = delete(audit_logs).where(
            audit_logs.c.id == audit_log_id,
            audit_logs.c.tenant_id == tenant_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def delete_many(self, tenant_id: str, audit_log_ids: Sequence[str]) -> int:
        stmt = delete(audit_logs).where(
            audit_logs.c.id.in_(list(audit_log_ids)),
            audit_logs.c.tenant_id == tenant_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    def _conditions(self, tenant_id: str, filters: AuditLogFilter) -> list:
        conditions = [audit_logs.c.tenant_id == tenant_id]
        if filters.action:
            conditions.append(audit_logs.c.action == filters.action)
        if filters.resource_type:
            conditions.append(audit_logs.c.resource_type == filters.resource_type)
        if filters.user_id:
            conditions.append(audit_logs.c.user_id == filters.user_id)
        if filters.search:
            pattern = f"%{filters.search}%"
            conditions.append(
                or_(
                    audit_logs.c.resource_id.like(pattern),
                    cast(audit_logs.c.changes, String).like(pattern),
                )
            )
        return conditions

    def _map_record(self, row) -> AuditLogRecord:
        return AuditLogRecord(
            id=row["id"],
            tenant_id=row["tenant_id"],
            user_id=row.get("user_id"),
            action=row["action"],
            resource_type=row["resource_type"],
            resource_id=row.get("resource_id"),
            changes=row.get("changes"),
            ip_address=row.get("ip_address"),
            user_agent=row.get("user_agent"),
            created_at=row.get("created_at"),
        )
