"""
El wizard completo contra la app real (repositorios in-memory sembrados).

MarketplaceClient habla con la app vía httpx.ASGITransport, sin red.
"""

import httpx
import pytest

from marketplace.config import get_settings
from marketplace.main import app
from marketplace.wizard import (
    BookingWizard,
    InMemoryPendingBookingStore,
    MarketplaceClient,
    WizardStep,
)

BASE_URL = "http://testserver/api/v1"


@pytest.fixture
async def api_client(seed):
    client = MarketplaceClient(
        BASE_URL,
        tenant_id=seed.tenant_id,
        user_id=seed.customer_id,
        transport=httpx.ASGITransport(app=app),
    )
    async with client:
        yield client


@pytest.fixture
def wizard(api_client, seed, bundle) -> BookingWizard:
    return BookingWizard(
        service_id=seed.service_id,
        client=api_client,
        pending_store=InMemoryPendingBookingStore(),
        current_url=f"/services/{seed.service_id}/book",
        clock=bundle["clock"],
    )


async def _fill_step_one(wizard: BookingWizard, seed) -> None:
    assert await wizard.mount() is None
    await wizard.select_date(seed.day)
    wizard.select_time("10:00")
    assert await wizard.next() is True


async def test_instant_booking_end_to_end(wizard, seed, bundle):
    await _fill_step_one(wizard, seed)
    wizard.toggle_addon(seed.optional_addon_id)
    wizard.choose_payment_type("instant")
    assert await wizard.next() is True
    assert await wizard.next() is True
    wizard.update_payment(
        card_number="4242 4242 4242 4242",
        card_name="Sara Ali",
        expiry_date="12/30",
        cvv="123",
    )

    assert await wizard.next() is True

    assert wizard.step == WizardStep.CONFIRMATION
    stored = bundle["booking_repo"].bookings[wizard.booking_id]
    assert stored.status == "confirmed"
    assert stored.payment_status == "paid"
    assert stored.total_amount == wizard.total_amount
    summary = wizard.confirmation_summary()
    assert summary.total_amount == 145.0
    assert summary.provider_name == "Sparkle Co"


async def test_instant_booking_in_production_mode_awaits_processor(wizard, seed, bundle, monkeypatch):
    monkeypatch.setattr(get_settings(), "payment_mode", "production")
    await _fill_step_one(wizard, seed)
    wizard.choose_payment_type("instant")
    assert await wizard.next() is True
    assert await wizard.next() is True
    wizard.update_payment(
        card_number="4242 4242 4242 4242",
        card_name="Sara Ali",
        expiry_date="12/30",
        cvv="123",
    )

    assert await wizard.next() is True

    assert wizard.step == WizardStep.CONFIRMATION
    assert wizard.awaiting_processor is True
    assert wizard.error is None
    stored = bundle["booking_repo"].bookings[wizard.booking_id]
    assert stored.status == "pending"
    assert stored.payment_status == "pending"
    payment_repo = bundle["payment_repo"]
    payments = [payment_repo._by_id[pid] for pid in payment_repo._by_booking[wizard.booking_id]]
    assert [payment.status for payment in payments] == ["pending"]
    assert payments[0].transaction_ref.startswith("PROD_")
    assert wizard.confirmation_summary().payment_status == "pending"


async def test_cash_booking_end_to_end(wizard, seed, bundle):
    await _fill_step_one(wizard, seed)
    wizard.choose_payment_type("cash_on_delivery")

    assert await wizard.next() is True

    assert wizard.step == WizardStep.CONFIRMATION
    stored = bundle["booking_repo"].bookings[wizard.booking_id]
    assert stored.status == "pending"
    assert stored.payment_type == "cash_on_delivery"
    assert bundle["payment_repo"]._by_booking.get(wizard.booking_id, []) == []


async def test_declined_card_surfaces_server_message(wizard, seed, bundle):
    await _fill_step_one(wizard, seed)
    assert await wizard.next() is True
    assert await wizard.next() is True
    wizard.update_payment(
        card_number="4000 0000 0000 0002",
        card_name="Sara Ali",
        expiry_date="12/30",
        cvv="123",
    )

    assert await wizard.next() is False

    assert wizard.step == WizardStep.PAYMENT
    assert wizard.error == "Card declined"
    assert bundle["booking_repo"].bookings[wizard.booking_id].status == "pending"


async def test_taken_slot_is_not_offered(wizard, api_client, seed, booking_payload):
    await api_client.create_booking(booking_payload)

    await wizard.mount()
    await wizard.select_date(seed.day)

    assert "10:00" not in wizard.available_slots
    wizard.select_time("10:00")
    assert await wizard.next() is False
    assert wizard.errors == {"scheduledTime": "Selected time is not available"}


async def test_unknown_service_shows_error(api_client, seed):
    wizard = BookingWizard(
        service_id="does-not-exist",
        client=api_client,
        pending_store=InMemoryPendingBookingStore(),
        current_url="/services/does-not-exist/book",
    )

    await wizard.mount()

    assert wizard.service is None
    assert wizard.error == "Service not found"
