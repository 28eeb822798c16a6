from marketplace.api.schemas.bookings import BookingListResponse, BookingSummary
from marketplace.application.dtos.request_context import RequestContext
from marketplace.application.interfaces.booking_repo import BookingRepo


class ListCustomerBookingsUseCase:
    def __init__(self, booking_repo: BookingRepo) -> None:
        self._booking_repo = booking_repo

    async def execute(self, context: RequestContext) -> BookingListResponse:
        bookings = await self._booking_repo.list_for_customer(context.tenant_id, context.user_id)
        return BookingListResponse(
            bookings=[BookingSummary.from_record(booking) for booking in bookings]
        )
