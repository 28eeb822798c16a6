import json
import logging
from typing import Any

import httpx

from marketplace.config import Settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Falla de una llamada remota, reducida a un mensaje mostrable."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(body: Any, fallback: str) -> str:
    if not isinstance(body, dict):
        return fallback
    detail = body.get("detail")
    if isinstance(detail, str) and detail:
        return detail
    if isinstance(detail, list):
        # 422 de FastAPI: lista de errores de pydantic
        messages = [
            str(item.get("msg", "")).removeprefix("Value error, ")
            for item in detail
            if isinstance(item, dict)
        ]
        messages = [message for message in messages if message]
        if messages:
            return "; ".join(messages)
    error = body.get("error")
    if isinstance(error, str) and error:
        return error
    return fallback


class MarketplaceClient:
    """
    Cliente HTTP de la API del marketplace para el wizard.

    La identidad viaja en las cabeceras X-Tenant-Id / X-User-Id / X-User-Role,
    igual que la inyecta el gateway de autenticación. Toda petición lleva
    timeout; una petición colgada termina en ``ApiError`` con el mensaje de
    respaldo.
    """

    def __init__(
        self,
        base_url: str,
        tenant_id: str,
        user_id: str | None = None,
        role: str | None = None,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"X-Tenant-Id": tenant_id}
        if user_id:
            headers["X-User-Id"] = user_id
            headers["X-User-Role"] = role or "customer"
        self.user_id = user_id
        self.timeout_seconds = timeout_seconds
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout_seconds,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        tenant_id: str,
        user_id: str | None = None,
        role: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "MarketplaceClient":
        return cls(
            settings.api_base_url,
            tenant_id=tenant_id,
            user_id=user_id,
            role=role,
            timeout_seconds=settings.api_timeout_seconds,
            transport=transport,
        )

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "MarketplaceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, fallback: str, **kwargs) -> dict:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning(
                "Marketplace API request failed",
                extra={"method": method, "path": path, "error": str(exc)},
            )
            raise ApiError(fallback) from exc

        try:
            body = response.json()
        except json.JSONDecodeError:
            body = None

        if response.is_success and (not isinstance(body, dict) or body.get("success", True)):
            return body if isinstance(body, dict) else {}

        raise ApiError(_error_message(body, fallback), status_code=response.status_code)

    async def get_service(self, service_id: str) -> dict:
        body = await self._request("GET", f"/services/{service_id}", "Failed to load service")
        data = body.get("data")
        if not data:
            raise ApiError("Failed to load service")
        return data

    async def get_profile(self) -> dict:
        body = await self._request("GET", "/auth/me", "Failed to load profile")
        user = body.get("user")
        if not user:
            raise ApiError("Failed to load profile")
        return user

    async def get_available_slots(self, service_id: str, provider_id: str, day: str) -> list[str]:
        body = await self._request(
            "GET",
            "/bookings/available-slots",
            "Failed to load available slots",
            params={"serviceId": service_id, "providerId": provider_id, "date": day},
        )
        return list(body.get("availableSlots") or [])

    async def create_booking(self, payload: dict, idem_key: str | None = None) -> dict:
        headers = {"Idempotency-Key": idem_key} if idem_key else None
        return await self._request(
            "POST",
            "/bookings",
            "Failed to create booking",
            json=payload,
            headers=headers,
        )

    async def create_payment(self, payload: dict, idem_key: str | None = None) -> dict:
        headers = {"Idempotency-Key": idem_key} if idem_key else None
        return await self._request(
            "POST",
            "/payments",
            "Failed to process payment",
            json=payload,
            headers=headers,
        )

    async def confirm_booking(self, booking_id: str) -> dict:
        return await self._request(
            "PUT",
            f"/bookings/{booking_id}/confirm",
            "Failed to confirm booking",
        )
