from fastapi import APIRouter, Depends, Query, status

from marketplace.api.dependencies import get_admin_context, get_use_cases
from marketplace.api.schemas.audit_logs import (
    AuditLogListResponse,
    AuditLogResponse,
    BulkDeleteRequest,
    CreateAuditLogRequest,
    DeleteResponse,
    UpdateAuditLogRequest,
)
from marketplace.application.dtos import RequestContext
from marketplace.application.interfaces.audit_log_repo import AuditLogFilter

router = APIRouter(prefix="/admin/audit-logs")


@router.get("", response_model=AuditLogListResponse, status_code=status.HTTP_200_OK)
async def list_audit_logs(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    action: str | None = None,
    resource_type: str | None = None,
    user_id: str | None = None,
    search: str | None = None,
    context: RequestContext = Depends(get_admin_context),
    use_cases=Depends(get_use_cases),
) -> AuditLogListResponse:
    filters = AuditLogFilter(
        action=action or None,
        resource_type=resource_type or None,
        user_id=user_id or None,
        search=search.strip() if search and search.strip() else None,
    )
    return await use_cases["list_audit_logs"].execute(
        context=context,
        filters=filters,
        page=page,
        limit=limit,
    )


@router.post("", response_model=AuditLogResponse, status_code=status.HTTP_201_CREATED)
async def create_audit_log(
    payload: CreateAuditLogRequest,
    context: RequestContext = Depends(get_admin_context),
    use_cases=Depends(get_use_cases),
) -> AuditLogResponse:
    return await use_cases["create_audit_log"].execute(context=context, request=payload)


@router.delete("", response_model=DeleteResponse, status_code=status.HTTP_200_OK)
async def delete_audit_log_by_query(
    audit_log_id: str | None = Query(default=None, alias="id"),
    context: RequestContext = Depends(get_admin_context),
    use_cases=Depends(get_use_cases),
) -> DeleteResponse:
    return await use_cases["delete_audit_log"].execute(context=context, audit_log_id=audit_log_id)


@router.post("/bulk-delete", response_model=DeleteResponse, status_code=status.HTTP_200_OK)
async def bulk_delete_audit_logs(
    payload: BulkDeleteRequest,
    context: RequestContext = Depends(get_admin_context),
    use_cases=Depends(get_use_cases),
) -> DeleteResponse:
    return await use_cases["delete_audit_logs"].execute(context=context, audit_log_ids=payload.ids)


@router.get("/{audit_log_id}", response_model=AuditLogResponse, status_code=status.HTTP_200_OK)
async def get_audit_log(
    audit_log_id: str,
    context: RequestContext = Depends(get_admin_context),
    use_cases=Depends(get_use_cases),
) -> AuditLogResponse:
    return await use_cases["get_audit_log"].execute(context=context, audit_log_id=audit_log_id)


@router.put("/{audit_log_id}", response_model=AuditLogResponse, status_code=status.HTTP_200_OK)
async def update_audit_log(
    audit_log_id: str,
    payload: UpdateAuditLogRequest,
    context: RequestContext = Depends(get_admin_context),
    use_cases=Depends(get_use_cases),
) -> AuditLogResponse:
    return await use_cases["update_audit_log"].execute(
        context=context,
        audit_log_id=audit_log_id,
        request=payload,
    )


@router.delete("/{audit_log_id}", response_model=DeleteResponse, status_code=status.HTTP_200_OK)
async def delete_audit_log(
    audit_log_id: str,
    context: RequestContext = Depends(get_admin_context),
    use_cases=Depends(get_use_cases),
) -> DeleteResponse:
    return await use_cases["delete_audit_log"].execute(context=context, audit_log_id=audit_log_id)
