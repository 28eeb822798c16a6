from fastapi import APIRouter, Depends, Header, status

from marketplace.api.dependencies import get_customer_context, get_use_cases
from marketplace.api.schemas.payments import CreatePaymentRequest, CreatePaymentResponse
from marketplace.application.dtos import RequestContext
from marketplace.infrastructure.db.retry import retry_on_deadlock

router = APIRouter()


@router.post(
    "/payments",
    response_model=CreatePaymentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_payment(
    payload: CreatePaymentRequest,
    idem_key: str | None = Header(default=None, convert_underscores=False, alias="Idempotency-Key"),
    context: RequestContext = Depends(get_customer_context),
    use_cases=Depends(get_use_cases),
) -> CreatePaymentResponse:
    return await retry_on_deadlock(
        lambda: use_cases["process_payment"].execute(
            context=context,
            request=payload,
            idem_key=idem_key,
        )
    )
