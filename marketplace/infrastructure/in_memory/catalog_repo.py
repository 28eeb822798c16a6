from marketplace.application.interfaces.catalog_repo import CatalogRepo
from marketplace.domain.entities.service import (
    Service,
    ServiceAddon,
    ServiceCategory,
    ServiceProvider,
)


class InMemoryCatalogRepo(CatalogRepo):
    def __init__(self) -> None:
        self.services: dict[str, Service] = {}
        self.providers: dict[str, ServiceProvider] = {}
        self.categories: dict[str, ServiceCategory] = {}

    # Carga de datos (seed / tests)

    def add_provider(self, provider: ServiceProvider) -> ServiceProvider:
        self.providers[provider.id] = provider
        return provider

    def add_category(self, category: ServiceCategory) -> ServiceCategory:
        self.categories[category.id] = category
        return category

    def add_service(self, service: Service) -> Service:
        self.services[service.id] = service
        return service

    def add_addon(self, addon: ServiceAddon) -> ServiceAddon:
        service = self.services.get(addon.service_id)
        if not service:
            raise ValueError("Service not found")
        service.addons.append(addon)
        return addon

    # Puerto

    async def get_active_service(self, tenant_id: str, service_id: str) -> Service | None:
        service = self.services.get(service_id)
        if not service or service.tenant_id != tenant_id or not service.is_active:
            return None
        return service

    async def get_provider(self, provider_id: str) -> ServiceProvider | None:
        return self.providers.get(provider_id)

    async def get_category(self, category_id: str) -> ServiceCategory | None:
        return self.categories.get(category_id)
