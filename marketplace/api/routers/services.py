from fastapi import APIRouter, Depends, status

from marketplace.api.dependencies import get_tenant_context, get_use_cases
from marketplace.api.schemas.catalog import ServiceDetailsResponse
from marketplace.application.dtos import RequestContext

router = APIRouter()


@router.get(
    "/services/{service_id}",
    response_model=ServiceDetailsResponse,
    status_code=status.HTTP_200_OK,
)
async def get_service(
    service_id: str,
    context: RequestContext = Depends(get_tenant_context),
    use_cases=Depends(get_use_cases),
) -> ServiceDetailsResponse:
    return await use_cases["get_service_details"].execute(
        tenant_id=context.tenant_id,
        service_id=service_id,
    )
