from dataclasses import dataclass

from marketplace.domain.entities.service import (
    Service,
    ServiceCategory,
    ServiceProvider,
)


@dataclass
class ServiceDetails:
    service: Service
    provider: ServiceProvider
    category: ServiceCategory | None = None


class CatalogRepo:
    async def get_active_service(self, tenant_id: str, service_id: str) -> Service | None:
        """Servicio activo del tenant, con sus add-ons cargados."""
        raise NotImplementedError

    async def get_provider(self, provider_id: str) -> ServiceProvider | None:
        raise NotImplementedError

    async def get_category(self, category_id: str) -> ServiceCategory | None:
        raise NotImplementedError
