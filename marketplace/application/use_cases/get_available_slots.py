import logging
from datetime import date

from marketplace.api.schemas.bookings import AvailableSlotsResponse
from marketplace.application.interfaces.booking_repo import BookingRepo
from marketplace.application.interfaces.catalog_repo import CatalogRepo
from marketplace.domain.errors import ServiceNotFoundError
from marketplace.domain.scheduling import (
    DEFAULT_DURATION_MINUTES,
    DEFAULT_END_HOUR,
    DEFAULT_START_HOUR,
    DEFAULT_STEP_MINUTES,
    generate_available_slots,
)


class GetAvailableSlotsUseCase:
    def __init__(
        self,
        catalog_repo: CatalogRepo,
        booking_repo: BookingRepo,
        start_hour: int = DEFAULT_START_HOUR,
        end_hour: int = DEFAULT_END_HOUR,
        step_minutes: int = DEFAULT_STEP_MINUTES,
        default_duration_minutes: int = DEFAULT_DURATION_MINUTES,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._booking_repo = booking_repo
        self._start_hour = start_hour
        self._end_hour = end_hour
        self._step_minutes = step_minutes
        self._default_duration = default_duration_minutes
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        tenant_id: str,
        service_id: str,
        provider_id: str,
        day: date,
    ) -> AvailableSlotsResponse:
        service = await self._catalog_repo.get_active_service(tenant_id, service_id)
        if not service:
            raise ServiceNotFoundError(service_id)

        duration = service.duration_minutes or self._default_duration
        bookings = await self._booking_repo.list_blocking_for_provider(tenant_id, provider_id, day)
        slots = generate_available_slots(
            day,
            busy=[booking.interval for booking in bookings],
            duration_minutes=duration,
            start_hour=self._start_hour,
            end_hour=self._end_hour,
            step_minutes=self._step_minutes,
        )
        self._logger.debug(
            "Available slots computed",
            extra={
                "service_id": service_id,
                "provider_id": provider_id,
                "date": day.isoformat(),
                "busy": len(bookings),
                "available": len(slots),
            },
        )
        return AvailableSlotsResponse(available_slots=slots, duration=duration)
