"""Casos de uso del CRUD administrativo de audit logs (tenant-scoped)."""

import logging
import math

from marketplace.api.schemas.audit_logs import (
    AuditLogItem,
    AuditLogListResponse,
    AuditLogResponse,
    CreateAuditLogRequest,
    DeleteResponse,
    Pagination,
    UpdateAuditLogRequest,
)
from marketplace.application.dtos.request_context import RequestContext
from marketplace.application.interfaces.audit_log_repo import (
    AuditLogFilter,
    AuditLogRecord,
    AuditLogRepo,
)
from marketplace.application.interfaces.clock import Clock
from marketplace.application.interfaces.id_generator import IdGenerator
from marketplace.application.interfaces.transaction_manager import TransactionManager
from marketplace.domain.errors import AuditLogNotFoundError, ValidationError

logger = logging.getLogger(__name__)


class ListAuditLogsUseCase:
    def __init__(self, audit_log_repo: AuditLogRepo) -> None:
        self._audit_log_repo = audit_log_repo

    async def execute(
        self,
        context: RequestContext,
        filters: AuditLogFilter,
        page: int = 1,
        limit: int = 20,
    ) -> AuditLogListResponse:
        page = max(page, 1)
        limit = max(limit, 1)
        total = await self._audit_log_repo.count(context.tenant_id, filters)
        records = await self._audit_log_repo.list_page(
            context.tenant_id, filters, offset=(page - 1) * limit, limit=limit
        )
        return AuditLogListResponse(
            audit_logs=[AuditLogItem.from_record(record) for record in records],
            pagination=Pagination(
                total=total,
                page=page,
                limit=limit,
                total_pages=math.ceil(total / limit),
            ),
        )


class CreateAuditLogUseCase:
    def __init__(
        self,
        audit_log_repo: AuditLogRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
        id_generator: IdGenerator,
    ) -> None:
        self._audit_log_repo = audit_log_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._id_generator = id_generator

    async def execute(
        self,
        context: RequestContext,
        request: CreateAuditLogRequest,
    ) -> AuditLogResponse:
        record = AuditLogRecord(
            id=self._id_generator.new_id(),
            tenant_id=context.tenant_id,
            user_id=context.user_id,
            action=request.action,
            resource_type=request.resource_type,
            resource_id=request.resource_id,
            changes=request.changes,
            ip_address=context.ip_address,
            user_agent=context.user_agent,
            created_at=self._clock.now(),
        )
        async with self._transaction_manager.start():
            await self._audit_log_repo.add(record)
        logger.info(
            "Audit log created",
            extra={"audit_log_id": record.id, "action": record.action},
        )
        return AuditLogResponse(audit_log=AuditLogItem.from_record(record))


class GetAuditLogUseCase:
    def __init__(self, audit_log_repo: AuditLogRepo) -> None:
        self._audit_log_repo = audit_log_repo

    async def execute(self, context: RequestContext, audit_log_id: str) -> AuditLogResponse:
        record = await self._audit_log_repo.get(context.tenant_id, audit_log_id)
        if not record:
            raise AuditLogNotFoundError(audit_log_id)
        return AuditLogResponse(audit_log=AuditLogItem.from_record(record))


class UpdateAuditLogUseCase:
    def __init__(
        self,
        audit_log_repo: AuditLogRepo,
        transaction_manager: TransactionManager,
    ) -> None:
        self._audit_log_repo = audit_log_repo
        self._transaction_manager = transaction_manager

    async def execute(
        self,
        context: RequestContext,
        audit_log_id: str,
        request: UpdateAuditLogRequest,
    ) -> AuditLogResponse:
        fields = request.model_dump(exclude_unset=True)
        if not fields:
            raise ValidationError("body", "No fields to update")
        async with self._transaction_manager.start():
            record = await self._audit_log_repo.update(context.tenant_id, audit_log_id, fields)
            if not record:
                raise AuditLogNotFoundError(audit_log_id)
        logger.info(
            "Audit log updated",
            extra={"audit_log_id": audit_log_id, "fields": sorted(fields)},
        )
        return AuditLogResponse(audit_log=AuditLogItem.from_record(record))


class DeleteAuditLogUseCase:
    def __init__(
        self,
        audit_log_repo: AuditLogRepo,
        transaction_manager: TransactionManager,
    ) -> None:
        self._audit_log_repo = audit_log_repo
        self._transaction_manager = transaction_manager

    async def execute(self, context: RequestContext, audit_log_id: str | None) -> DeleteResponse:
        if not audit_log_id:
            raise ValidationError("id", "Audit log ID is required")
        async with self._transaction_manager.start():
            deleted = await self._audit_log_repo.delete(context.tenant_id, audit_log_id)
        if not deleted:
            raise AuditLogNotFoundError(audit_log_id)
        logger.info("Audit log deleted", extra={"audit_log_id": audit_log_id})
        return DeleteResponse(deleted_count=1)


class DeleteAuditLogsUseCase:
    def __init__(
        self,
        audit_log_repo: AuditLogRepo,
        transaction_manager: TransactionManager,
    ) -> None:
        self._audit_log_repo = audit_log_repo
        self._transaction_manager = transaction_manager

    async def execute(self, context: RequestContext, audit_log_ids: list[str]) -> DeleteResponse:
        ids = list(dict.fromkeys(audit_log_ids))
        if not ids:
            raise ValidationError("ids", "No audit log IDs provided")
        async with self._transaction_manager.start():
            deleted = await self._audit_log_repo.delete_many(context.tenant_id, ids)
        logger.info(
            "Audit logs deleted",
            extra={"requested": len(ids), "deleted": deleted},
        )
        return DeleteResponse(deleted_count=deleted)
