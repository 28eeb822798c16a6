from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.application.interfaces.catalog_repo import CatalogRepo
from marketplace.domain.entities.service import (
    Service,
    ServiceAddon,
    ServiceCategory,
    ServiceProvider,
)
from marketplace.infrastructure.db.tables import (
    service_addons,
    service_categories,
    service_providers,
    services,
)


class CatalogRepoSQL(CatalogRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_active_service(self, tenant_id: str, service_id: str) -> Service | None:
        stmt = select(services).where(
            services.c.id == service_id,
            services.c.tenant_id == tenant_id,
            services.c.is_active.is_(True),
        )
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        addons_stmt = (
            select(service_addons)
            .where(service_addons.c.service_id == service_id)
            .order_by(service_addons.c.is_required.desc(), service_addons.c.name)
        )
        addon_rows = (await self._session.execute(addons_stmt)).mappings().all()
        return Service(
            id=row["id"],
            tenant_id=row["tenant_id"],
            provider_id=row["provider_id"],
            category_id=row.get("category_id"),
            name=row["name"],
            name_ar=row.get("name_ar"),
            description=row.get("description"),
            description_ar=row.get("description_ar"),
            price=Decimal(str(row["base_price"])),
            currency=row["currency"],
            duration_minutes=row.get("duration_minutes"),
            is_active=bool(row["is_active"]),
            addons=[self._map_addon(addon) for addon in addon_rows],
        )

    async def get_provider(self, provider_id: str) -> ServiceProvider | None:
        stmt = select(service_providers).where(service_providers.c.id == provider_id)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return ServiceProvider(
            id=row["id"],
            tenant_id=row["tenant_id"],
            user_id=row["user_id"],
            business_name=row["business_name"],
            business_name_ar=row.get("business_name_ar"),
            description=row.get("description"),
            rating=Decimal(str(row["rating"] or 0)),
            total_reviews=row["total_reviews"] or 0,
            commission_rate=Decimal(str(row["commission_rate"] or 0)),
            is_verified=bool(row["is_verified"]),
        )

    async def get_category(self, category_id: str) -> ServiceCategory | None:
        stmt = select(service_categories).where(service_categories.c.id == category_id)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return ServiceCategory(
            id=row["id"],
            tenant_id=row["tenant_id"],
            name=row["name"],
            name_ar=row.get("name_ar"),
        )

    def _map_addon(self, row) -> ServiceAddon:
        return ServiceAddon(
            id=row["id"],
            service_id=row["service_id"],
            name=row["name"],
            name_ar=row.get("name_ar"),
            description=row.get("description"),
            price=Decimal(str(row["price"])),
            is_required=bool(row["is_required"]),
        )
