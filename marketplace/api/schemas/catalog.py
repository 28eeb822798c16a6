from marketplace.api.schemas.common import CamelModel
from marketplace.domain.entities.service import (
    Service,
    ServiceAddon,
    ServiceCategory,
    ServiceProvider,
)


class CategorySummary(CamelModel):
    id: str
    name: str
    name_ar: str | None = None

    @classmethod
    def from_entity(cls, category: ServiceCategory) -> "CategorySummary":
        return cls(id=category.id, name=category.name, name_ar=category.name_ar)


class ProviderSummary(CamelModel):
    id: str
    name: str
    name_ar: str | None = None
    description: str | None = None
    rating: float = 0
    total_reviews: int = 0
    is_verified: bool = False

    @classmethod
    def from_entity(cls, provider: ServiceProvider) -> "ProviderSummary":
        return cls(
            id=provider.id,
            name=provider.business_name,
            name_ar=provider.business_name_ar,
            description=provider.description,
            rating=float(provider.rating),
            total_reviews=provider.total_reviews,
            is_verified=provider.is_verified,
        )


class ServiceSummary(CamelModel):
    id: str
    provider_id: str
    name: str
    name_ar: str | None = None
    description: str | None = None
    description_ar: str | None = None
    price: float
    currency: str
    duration: int | None = None
    category: CategorySummary | None = None
    provider: ProviderSummary


class AddonSummary(CamelModel):
    id: str
    name: str
    name_ar: str | None = None
    description: str | None = None
    price: float
    is_required: bool = False

    @classmethod
    def from_entity(cls, addon: ServiceAddon) -> "AddonSummary":
        return cls(
            id=addon.id,
            name=addon.name,
            name_ar=addon.name_ar,
            description=addon.description,
            price=float(addon.price),
            is_required=addon.is_required,
        )


class ServiceDetailsData(CamelModel):
    service: ServiceSummary
    addons: list[AddonSummary]


class ServiceDetailsResponse(CamelModel):
    success: bool = True
    data: ServiceDetailsData

    @classmethod
    def build(
        cls,
        service: Service,
        provider: ServiceProvider,
        category: ServiceCategory | None,
    ) -> "ServiceDetailsResponse":
        ordered = sorted(service.addons, key=lambda addon: (not addon.is_required, addon.name))
        return cls(
            data=ServiceDetailsData(
                service=ServiceSummary(
                    id=service.id,
                    provider_id=service.provider_id,
                    name=service.name,
                    name_ar=service.name_ar,
                    description=service.description,
                    description_ar=service.description_ar,
                    price=float(service.price),
                    currency=service.currency,
                    duration=service.duration_minutes,
                    category=CategorySummary.from_entity(category) if category else None,
                    provider=ProviderSummary.from_entity(provider),
                ),
                addons=[AddonSummary.from_entity(addon) for addon in ordered],
            )
        )
