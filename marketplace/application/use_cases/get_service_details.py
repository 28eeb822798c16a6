from marketplace.api.schemas.catalog import ServiceDetailsResponse
from marketplace.application.interfaces.catalog_repo import CatalogRepo
from marketplace.domain.errors import ServiceNotFoundError


class GetServiceDetailsUseCase:
    def __init__(self, catalog_repo: CatalogRepo) -> None:
        self._catalog_repo = catalog_repo

    async def execute(self, tenant_id: str, service_id: str) -> ServiceDetailsResponse:
        service = await self._catalog_repo.get_active_service(tenant_id, service_id)
        if not service:
            raise ServiceNotFoundError(service_id)
        provider = await self._catalog_repo.get_provider(service.provider_id)
        if not provider:
            raise ServiceNotFoundError(service_id)
        category = None
        if service.category_id:
            category = await self._catalog_repo.get_category(service.category_id)
        return ServiceDetailsResponse.build(service, provider, category)
