"""
Fixtures compartidas.

Los tests de endpoints corren contra los repositorios in-memory
(USE_IN_MEMORY=true, el default). El bundle se recrea en cada test, con un
catálogo sembrado y un reloj fijo para que los timestamps sean deterministas.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from marketplace.api.dependencies import _in_memory_bundle
from marketplace.application.interfaces.clock import FakeClock
from marketplace.application.interfaces.user_repo import UserRecord
from marketplace.domain.entities.service import (
    Service,
    ServiceAddon,
    ServiceCategory,
    ServiceProvider,
)
from marketplace.main import app


@dataclass
class Seed:
    tenant_id: str = "tenant-a"
    other_tenant_id: str = "tenant-b"
    customer_id: str = "user-customer"
    other_customer_id: str = "user-other"
    provider_user_id: str = "user-provider"
    admin_id: str = "user-admin"
    provider_id: str = "prov-1"
    category_id: str = "cat-1"
    service_id: str = "svc-1"
    inactive_service_id: str = "svc-inactive"
    foreign_service_id: str = "svc-foreign"
    required_addon_id: str = "addon-req"
    optional_addon_id: str = "addon-opt"
    day: str = "2030-01-15"

    def customer_headers(self, user_id: str | None = None) -> dict:
        return {
            "X-Tenant-Id": self.tenant_id,
            "X-User-Id": user_id or self.customer_id,
            "X-User-Role": "customer",
        }

    def provider_headers(self) -> dict:
        return {
            "X-Tenant-Id": self.tenant_id,
            "X-User-Id": self.provider_user_id,
            "X-User-Role": "provider",
        }

    def admin_headers(self) -> dict:
        return {
            "X-Tenant-Id": self.tenant_id,
            "X-User-Id": self.admin_id,
            "X-User-Role": "admin",
        }

    def public_headers(self) -> dict:
        return {"X-Tenant-Id": self.tenant_id}


def seed_marketplace(bundle: dict, seed: Seed) -> None:
    catalog = bundle["catalog_repo"]
    catalog.add_category(ServiceCategory(id=seed.category_id, tenant_id=seed.tenant_id, name="Cleaning"))
    catalog.add_provider(
        ServiceProvider(
            id=seed.provider_id,
            tenant_id=seed.tenant_id,
            user_id=seed.provider_user_id,
            business_name="Sparkle Co",
            rating=Decimal("4.50"),
            total_reviews=12,
            commission_rate=Decimal("10"),
            is_verified=True,
        )
    )
    catalog.add_service(
        Service(
            id=seed.service_id,
            tenant_id=seed.tenant_id,
            provider_id=seed.provider_id,
            category_id=seed.category_id,
            name="Home Cleaning",
            price=Decimal("100.00"),
            duration_minutes=60,
            addons=[
                ServiceAddon(
                    id=seed.optional_addon_id,
                    service_id=seed.service_id,
                    name="Balcony",
                    price=Decimal("25.00"),
                ),
                ServiceAddon(
                    id=seed.required_addon_id,
                    service_id=seed.service_id,
                    name="Supplies",
                    price=Decimal("20.00"),
                    is_required=True,
                ),
            ],
        )
    )
    catalog.add_service(
        Service(
            id=seed.inactive_service_id,
            tenant_id=seed.tenant_id,
            provider_id=seed.provider_id,
            name="Retired Service",
            price=Decimal("50.00"),
            is_active=False,
        )
    )
    catalog.add_service(
        Service(
            id=seed.foreign_service_id,
            tenant_id=seed.other_tenant_id,
            provider_id=seed.provider_id,
            name="Other Tenant Service",
            price=Decimal("70.00"),
        )
    )

    users = bundle["user_repo"]
    users.add_user(
        UserRecord(
            id=seed.customer_id,
            tenant_id=seed.tenant_id,
            email="sara@example.com",
            first_name="Sara",
            last_name="Ali",
            phone="0501234567",
            address="12 King Fahd Road, Riyadh",
        )
    )
    users.add_user(
        UserRecord(
            id=seed.other_customer_id,
            tenant_id=seed.tenant_id,
            email="omar@example.com",
            first_name="Omar",
        )
    )
    users.add_user(
        UserRecord(
            id=seed.admin_id,
            tenant_id=seed.tenant_id,
            email="admin@example.com",
            first_name="Admin",
            role="admin",
        )
    )


@pytest.fixture
def seed() -> Seed:
    return Seed()


@pytest.fixture(autouse=True)
def bundle(seed):
    _in_memory_bundle.cache_clear()
    bundle = _in_memory_bundle()
    bundle["clock"] = FakeClock(datetime(2030, 1, 1, 8, 0))
    seed_marketplace(bundle, seed)
    yield bundle
    _in_memory_bundle.cache_clear()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def booking_payload(seed) -> dict:
    return {
        "serviceId": seed.service_id,
        "providerId": seed.provider_id,
        "scheduledAt": f"{seed.day}T10:00:00",
        "customerAddress": "12 King Fahd Road, Riyadh",
        "notes": "Gate code 1234",
        "addons": [seed.required_addon_id, seed.optional_addon_id],
        "paymentType": "instant",
    }


@pytest.fixture
def create_booking(client, seed, booking_payload):
    """Crea una reserva vía API y retorna el body de la respuesta."""

    def _create(**overrides) -> dict:
        payload = {**booking_payload, **overrides}
        res = client.post("/api/v1/bookings", json=payload, headers=seed.customer_headers())
        assert res.status_code == 201, res.text
        return res.json()

    return _create
