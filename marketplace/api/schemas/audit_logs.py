from datetime import datetime
from typing import Any

from pydantic import Field

from marketplace.api.schemas.common import CamelModel, CamelRequest
from marketplace.application.interfaces.audit_log_repo import AuditLogRecord


class AuditLogItem(CamelModel):
    id: str
    user_id: str | None = None
    action: str
    resource_type: str
    resource_id: str | None = None
    changes: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_record(cls, record: AuditLogRecord) -> "AuditLogItem":
        return cls(
            id=record.id,
            user_id=record.user_id,
            action=record.action,
            resource_type=record.resource_type,
            resource_id=record.resource_id,
            changes=record.changes,
            ip_address=record.ip_address,
            user_agent=record.user_agent,
            created_at=record.created_at,
        )


class Pagination(CamelModel):
    total: int
    page: int
    limit: int
    total_pages: int


class AuditLogListResponse(CamelModel):
    audit_logs: list[AuditLogItem]
    pagination: Pagination


class AuditLogResponse(CamelModel):
    success: bool = True
    audit_log: AuditLogItem


class CreateAuditLogRequest(CamelRequest):
    action: str = Field(min_length=1, max_length=100)
    resource_type: str = Field(min_length=1, max_length=50)
    resource_id: str | None = None
    changes: dict[str, Any] | None = None


class UpdateAuditLogRequest(CamelRequest):
    action: str | None = Field(default=None, min_length=1, max_length=100)
    resource_type: str | None = Field(default=None, min_length=1, max_length=50)
    resource_id: str | None = None
    changes: dict[str, Any] | None = None


class BulkDeleteRequest(CamelRequest):
    ids: list[str]


class DeleteResponse(CamelModel):
    success: bool = True
    deleted_count: int
