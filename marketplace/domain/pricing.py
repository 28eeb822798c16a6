"""
Reglas de precio de una reserva.

El mismo cálculo lo usan el servidor al registrar la reserva y el wizard al
mostrar el total, de modo que ambos montos no pueden divergir.
"""

from collections.abc import Iterable
from decimal import Decimal

from marketplace.domain.entities.service import ServiceAddon
from marketplace.domain.value_objects.money import Money


def calculate_total(
    base_price: Decimal,
    addons: Iterable[ServiceAddon],
    selected_ids: Iterable[str],
    currency_code: str = "SAR",
) -> Money:
    """
    Total = precio base + suma de los add-ons seleccionados.

    Los ids seleccionados que no corresponden a un add-on del servicio se
    ignoran; un id repetido sólo se cobra una vez.
    """
    selected = set(selected_ids)
    total = Money(amount=base_price, currency_code=currency_code)
    for addon in addons:
        if addon.id in selected:
            total = total + Money(amount=addon.price, currency_code=currency_code)
    return total


def ensure_required_addons(addons: Iterable[ServiceAddon], selected_ids: Iterable[str]) -> list[str]:
    """Retorna la selección completada con los add-ons obligatorios, sin duplicados."""
    result = list(dict.fromkeys(selected_ids))
    for addon in addons:
        if addon.is_required and addon.id not in result:
            result.append(addon.id)
    return result


def missing_required_addons(addons: Iterable[ServiceAddon], selected_ids: Iterable[str]) -> list[str]:
    selected = set(selected_ids)
    return [addon.id for addon in addons if addon.is_required and addon.id not in selected]
