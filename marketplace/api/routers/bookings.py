from datetime import date

from fastapi import APIRouter, Depends, Header, Query, status

from marketplace.api.dependencies import (
    get_customer_context,
    get_tenant_context,
    get_use_cases,
)
from marketplace.api.schemas.bookings import (
    AvailableSlotsResponse,
    BookingListResponse,
    ConfirmBookingResponse,
    CreateBookingRequest,
    CreateBookingResponse,
)
from marketplace.application.dtos import RequestContext
from marketplace.domain.errors import ValidationError
from marketplace.infrastructure.db.retry import retry_on_deadlock

router = APIRouter()


@router.get(
    "/bookings/available-slots",
    response_model=AvailableSlotsResponse,
    status_code=status.HTTP_200_OK,
)
async def get_available_slots(
    service_id: str | None = Query(default=None, alias="serviceId"),
    provider_id: str | None = Query(default=None, alias="providerId"),
    day: str | None = Query(default=None, alias="date"),
    context: RequestContext = Depends(get_tenant_context),
    use_cases=Depends(get_use_cases),
) -> AvailableSlotsResponse:
    if not service_id or not provider_id or not day:
        raise ValidationError("query", "Service ID, Provider ID, and date are required")
    try:
        parsed_day = date.fromisoformat(day)
    except ValueError:
        raise ValidationError("date", "Invalid date (YYYY-MM-DD)") from None

    return await use_cases["get_available_slots"].execute(
        tenant_id=context.tenant_id,
        service_id=service_id,
        provider_id=provider_id,
        day=parsed_day,
    )


@router.get(
    "/bookings",
    response_model=BookingListResponse,
    status_code=status.HTTP_200_OK,
)
async def list_bookings(
    context: RequestContext = Depends(get_customer_context),
    use_cases=Depends(get_use_cases),
) -> BookingListResponse:
    return await use_cases["list_bookings"].execute(context=context)


@router.post(
    "/bookings",
    response_model=CreateBookingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    payload: CreateBookingRequest,
    idem_key: str | None = Header(default=None, convert_underscores=False, alias="Idempotency-Key"),
    context: RequestContext = Depends(get_customer_context),
    use_cases=Depends(get_use_cases),
) -> CreateBookingResponse:
    """
    Crea la reserva en una sola transacción.

    Dos clientes compitiendo por el mismo horario pueden chocar en el lock de la
    agenda del proveedor; el deadlock se reintenta y el perdedor recibe 409.
    """
    return await retry_on_deadlock(
        lambda: use_cases["create_booking"].execute(
            context=context,
            request=payload,
            idem_key=idem_key,
        )
    )


@router.put(
    "/bookings/{booking_id}/confirm",
    response_model=ConfirmBookingResponse,
    status_code=status.HTTP_200_OK,
)
async def confirm_booking(
    booking_id: str,
    context: RequestContext = Depends(get_customer_context),
    use_cases=Depends(get_use_cases),
) -> ConfirmBookingResponse:
    return await use_cases["confirm_booking"].execute(context=context, booking_id=booking_id)
