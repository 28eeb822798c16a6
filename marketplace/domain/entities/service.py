"""Entidades del catálogo: servicio, proveedor, categoría y add-ons."""

from dataclasses import dataclass, field
from decimal import Decimal

from marketplace.domain.constants import DEFAULT_CURRENCY
from marketplace.domain.value_objects.money import Money


@dataclass
class ServiceProvider:
    """Proveedor que ejecuta los servicios de un tenant."""

    id: str
    tenant_id: str
    user_id: str
    business_name: str
    business_name_ar: str | None = None
    description: str | None = None
    rating: Decimal = Decimal("0")
    total_reviews: int = 0
    commission_rate: Decimal = Decimal("0")
    is_verified: bool = False


@dataclass
class ServiceCategory:
    id: str
    tenant_id: str
    name: str
    name_ar: str | None = None


@dataclass
class ServiceAddon:
    """Extra opcional (u obligatorio) con precio propio."""

    id: str
    service_id: str
    name: str
    price: Decimal
    name_ar: str | None = None
    description: str | None = None
    is_required: bool = False


@dataclass
class Service:
    """
    Servicio publicado en el catálogo de un tenant.

    Cada servicio pertenece a exactamente un proveedor; ``duration_minutes``
    es None cuando el proveedor no la capturó.
    """

    id: str
    tenant_id: str
    provider_id: str
    name: str
    price: Decimal
    category_id: str | None = None
    name_ar: str | None = None
    description: str | None = None
    description_ar: str | None = None
    currency: str = DEFAULT_CURRENCY
    duration_minutes: int | None = None
    is_active: bool = True
    addons: list[ServiceAddon] = field(default_factory=list)

    @property
    def base_price(self) -> Money:
        return Money(amount=self.price, currency_code=self.currency)

    @property
    def required_addon_ids(self) -> list[str]:
        return [addon.id for addon in self.addons if addon.is_required]
