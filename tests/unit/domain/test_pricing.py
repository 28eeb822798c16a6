from decimal import Decimal

from marketplace.domain.entities.service import ServiceAddon
from marketplace.domain.pricing import (
    calculate_total,
    ensure_required_addons,
    missing_required_addons,
)

ADDONS = [
    ServiceAddon(id="a1", service_id="s1", name="Balcony", price=Decimal("25.00")),
    ServiceAddon(id="a2", service_id="s1", name="Supplies", price=Decimal("20.00"), is_required=True),
    ServiceAddon(id="a3", service_id="s1", name="Windows", price=Decimal("12.50")),
]


def test_total_without_addons_is_base_price():
    total = calculate_total(Decimal("100.00"), ADDONS, [])

    assert total.amount == Decimal("100.00")
    assert total.currency_code == "SAR"


def test_total_sums_selected_addons():
    total = calculate_total(Decimal("100.00"), ADDONS, ["a1", "a3"])

    assert total.amount == Decimal("137.50")


def test_unknown_and_repeated_ids_are_ignored():
    total = calculate_total(Decimal("100.00"), ADDONS, ["a1", "a1", "ghost"])

    assert total.amount == Decimal("125.00")


def test_currency_is_carried():
    total = calculate_total(Decimal("10"), [], [], currency_code="USD")

    assert str(total) == "10.00 USD"


def test_ensure_required_addons_appends_missing_required():
    assert ensure_required_addons(ADDONS, ["a1"]) == ["a1", "a2"]


def test_ensure_required_addons_keeps_order_and_drops_duplicates():
    assert ensure_required_addons(ADDONS, ["a2", "a1", "a2"]) == ["a2", "a1"]


def test_missing_required_addons():
    assert missing_required_addons(ADDONS, ["a1"]) == ["a2"]
    assert missing_required_addons(ADDONS, ["a2"]) == []
