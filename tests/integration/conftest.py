"""
Fixtures de base de datos para los tests de integración.

Cada test recibe un engine SQLite in-memory nuevo con todas las tablas
creadas. StaticPool mantiene una sola conexión, así todas las sesiones ven la
misma base.
"""

from collections.abc import AsyncGenerator
from datetime import datetime
from decimal import Decimal

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from marketplace.api.dependencies import get_session
from marketplace.config import get_settings
from marketplace.infrastructure.db.tables import (
    metadata,
    service_addons,
    service_categories,
    service_providers,
    services,
    users,
)
from marketplace.main import app

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(test_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded_db(test_engine, seed):
    """Siembra el mismo catálogo que usan los tests in-memory."""
    async with test_engine.begin() as conn:
        await conn.execute(
            insert(service_categories).values(id=seed.category_id, tenant_id=seed.tenant_id, name="Cleaning")
        )
        await conn.execute(
            insert(service_providers).values(
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
        await conn.execute(
            insert(services).values(
                id=seed.service_id,
                tenant_id=seed.tenant_id,
                provider_id=seed.provider_id,
                category_id=seed.category_id,
                name="Home Cleaning",
                base_price=Decimal("100.00"),
                currency="SAR",
                duration_minutes=60,
                is_active=True,
            )
        )
        await conn.execute(
            insert(service_addons),
            [
                {
                    "id": seed.optional_addon_id,
                    "service_id": seed.service_id,
                    "name": "Balcony",
                    "price": Decimal("25.00"),
                    "is_required": False,
                },
                {
                    "id": seed.required_addon_id,
                    "service_id": seed.service_id,
                    "name": "Supplies",
                    "price": Decimal("20.00"),
                    "is_required": True,
                },
            ],
        )
        await conn.execute(
            insert(users),
            [
                {
                    "id": seed.customer_id,
                    "tenant_id": seed.tenant_id,
                    "email": "sara@example.com",
                    "first_name": "Sara",
                    "last_name": "Ali",
                    "phone": "0501234567",
                    "address": "12 King Fahd Road, Riyadh",
                    "role": "customer",
                    "created_at": datetime(2029, 12, 1),
                },
            ],
        )
        await conn.execute(
            insert(users),
            [
                {
                    "id": seed.admin_id,
                    "tenant_id": seed.tenant_id,
                    "email": "admin@example.com",
                    "first_name": "Admin",
                    "role": "admin",
                    "created_at": datetime(2029, 12, 1),
                },
            ],
        )
    return test_engine


@pytest_asyncio.fixture
async def sql_api(seeded_db, session_factory, monkeypatch) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    Cliente HTTP contra la app con repositorios SQL.

    Cada request abre su propia sesión, como en producción.
    """

    async def _session():
        async with session_factory() as session:
            yield session

    monkeypatch.setattr(get_settings(), "use_in_memory", False)
    app.dependency_overrides[get_session] = _session
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    app.dependency_overrides.pop(get_session, None)
