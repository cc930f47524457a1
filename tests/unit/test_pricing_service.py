"""Tests for option-group and cart-line pricing."""

import sys
from pathlib import Path
from decimal import Decimal
import pytest

# Add src to path
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT / 'src'))

from pedy.models.catalog import Addition, Product
from pedy.models.cart import (
    CartLine,
    FlavorSelection,
    MultipleSelection,
    SelectedOption,
    SingleSelection,
)
from pedy.models.checkout import PricingCapability
from pedy.services.pricing_service import PricingService


def _options(*prices):
    return [
        SelectedOption(id=f"o{i}", name=f"Option {i}", price=Decimal(price))
        for i, price in enumerate(prices)
    ]


def _flavors(rule, *prices, has_auto_pricing=True):
    return FlavorSelection(
        group_id="sabores",
        group_name="Sabores",
        price_rule=rule,
        has_auto_pricing=has_auto_pricing,
        selected_options=_options(*prices),
    )


def test_empty_selection_is_zero():
    """Test that a group with nothing selected costs nothing."""
    assert PricingService.resolve_group_price(_flavors("highest")) == Decimal("0")
    assert PricingService.resolve_group_price(SingleSelection(group_id="g", group_name="G")) == Decimal("0")


def test_multiple_group_sums():
    """Test that multiple-choice groups always sum."""
    group = MultipleSelection(group_id="g", group_name="Extras", selected_options=_options("2", "3.5", "1"))
    assert PricingService.resolve_group_price(group) == Decimal("6.5")


def test_non_flavor_group_ignores_price_rule():
    """Test that a price rule on a single group payload is dropped."""
    group = SingleSelection.model_validate({
        "group_id": "g",
        "group_name": "Tamanho",
        "price_rule": "highest",
        "selected_options": [{"id": "a", "name": "Grande", "price": "12"}],
    })
    assert not hasattr(group, "price_rule")
    assert PricingService.resolve_group_price(group) == Decimal("12")


def test_flavor_highest():
    """Test the highest-price-wins rule."""
    assert PricingService.resolve_group_price(_flavors("highest", "30", "40", "35")) == Decimal("40")


def test_flavor_average():
    """Test the average rule."""
    assert PricingService.resolve_group_price(_flavors("average", "30", "40")) == Decimal("35")


def test_flavor_sum():
    """Test the explicit sum rule."""
    assert PricingService.resolve_group_price(_flavors("sum", "30", "40")) == Decimal("70")


def test_flavor_without_entitlement_sums():
    """Test that rule-based pricing degrades to sum without the entitlement."""
    group = _flavors("highest", "30", "40", has_auto_pricing=False)
    assert PricingService.resolve_group_price(group) == Decimal("70")


def test_flavor_with_unknown_entitlement_sums():
    """Test that a missing entitlement flag counts as not entitled."""
    group = _flavors("average", "30", "40", has_auto_pricing=None)
    assert PricingService.resolve_group_price(group) == Decimal("70")


def test_capability_overrides_snapshot_flag():
    """Test that an explicit capability decides over the stored flag."""
    group = _flavors("highest", "30", "40", has_auto_pricing=None)
    assert PricingService.resolve_group_price(group, PricingCapability(auto_pricing=True)) == Decimal("40")
    
    entitled = _flavors("highest", "30", "40", has_auto_pricing=True)
    assert PricingService.resolve_group_price(entitled, PricingCapability(auto_pricing=False)) == Decimal("70")


def test_unknown_rule_falls_back_to_sum():
    """Test that malformed rules are accepted and priced as a sum."""
    group = _flavors("custom", "30", "40")
    assert group.price_rule is None
    assert PricingService.resolve_group_price(group) == Decimal("70")


def test_rule_is_case_insensitive():
    """Test that rule names are normalised."""
    assert _flavors(" Highest ", "1").price_rule == "highest"


def test_line_total_scales_additions_by_quantity():
    """Test (unit price + additions) * quantity."""
    product = Product(id="p", name="Burger", base_price=Decimal("20"))
    line = CartLine(
        product=product,
        quantity=3,
        selected_additions=[Addition(id="a", name="Cheddar", price=Decimal("5"))],
    )
    assert PricingService.resolve_line_total(line) == Decimal("75")


def test_line_total_uses_promotional_price():
    """Test that promotional products are charged the promotional price."""
    product = Product(
        id="p",
        name="Burger",
        base_price=Decimal("25"),
        is_promotional=True,
        original_price=Decimal("25"),
        promotional_price=Decimal("19.90"),
    )
    line = CartLine(product=product, quantity=2)
    assert PricingService.resolve_line_total(line) == Decimal("39.80")


def test_line_total_with_option_groups():
    """Test that option groups are added per unit."""
    product = Product(id="p", name="Pizza", base_price=Decimal("20"))
    line = CartLine(
        product=product,
        quantity=2,
        selected_additions=[Addition(id="a", name="Borda", price=Decimal("5"))],
        selected_option_groups=[
            _flavors("average", "10", "16"),
            SingleSelection(group_id="b", group_name="Bebida", selected_options=_options("6")),
        ],
    )
    assert PricingService.resolve_unit_price(line) == Decimal("44")
    assert PricingService.resolve_line_total(line) == Decimal("88")


def test_line_total_is_idempotent():
    """Test that repeated calls give the same result."""
    product = Product(id="p", name="Pizza", base_price=Decimal("20"))
    line = CartLine(product=product, quantity=2, selected_option_groups=[_flavors("average", "10", "15", "20")])
    
    assert PricingService.resolve_line_total(line) == PricingService.resolve_line_total(line)
