from fastapi import APIRouter, Depends, status

from marketplace.api.dependencies import get_customer_context, get_use_cases
from marketplace.api.schemas.profile import ProfileResponse, UpdateProfileRequest
from marketplace.application.dtos import RequestContext

router = APIRouter()


@router.get(
    "/auth/me",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
)
async def get_me(
    context: RequestContext = Depends(get_customer_context),
    use_cases=Depends(get_use_cases),
) -> ProfileResponse:
    return await use_cases["get_profile"].execute(context=context)


@router.put(
    "/customer/profile",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
)
async def update_profile(
    payload: UpdateProfileRequest,
    context: RequestContext = Depends(get_customer_context),
    use_cases=Depends(get_use_cases),
) -> ProfileResponse:
    return await use_cases["update_profile"].execute(context=context, request=payload)
