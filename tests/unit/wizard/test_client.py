import httpx

from marketplace.config import Settings
from marketplace.wizard.client import MarketplaceClient


async def test_from_settings_uses_configured_base_url_and_timeout():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"success": True, "availableSlots": ["09:00"]})

    settings = Settings(api_base_url="http://api.example.com/v2/", api_timeout_seconds=2.5)
    client = MarketplaceClient.from_settings(
        settings,
        tenant_id="tenant-a",
        user_id="user-customer",
        transport=httpx.MockTransport(handler),
    )

    async with client:
        slots = await client.get_available_slots("svc-1", "prov-1", "2030-01-15")

    assert slots == ["09:00"]
    assert client.timeout_seconds == 2.5
    request = seen[0]
    assert request.url.host == "api.example.com"
    assert request.url.path == "/v2/bookings/available-slots"
    assert request.headers["X-Tenant-Id"] == "tenant-a"
    assert request.headers["X-User-Id"] == "user-customer"
    assert request.extensions["timeout"]["read"] == 2.5


async def test_from_settings_without_user_is_anonymous():
    client = MarketplaceClient.from_settings(Settings(), tenant_id="tenant-a")

    async with client:
        assert client.is_authenticated is False
        assert client.timeout_seconds == Settings().api_timeout_seconds
