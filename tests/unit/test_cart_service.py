"""Tests for the in-memory cart."""

import sys
from pathlib import Path
from decimal import Decimal
import pytest

# Add src to path
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT / 'src'))

from pedy.exceptions import CartError
from pedy.models.catalog import Addition, Product
from pedy.models.checkout import PricingCapability
from pedy.services.cart_service import Cart
from pedy.services.selection_service import SelectionService


BACON = Addition(id="bacon", name="Bacon", price=Decimal("4"))
CHEDDAR = Addition(id="cheddar", name="Cheddar", price=Decimal("3"))


def _burger(**overrides):
    data = dict(id="burger", name="X-Burger", base_price=Decimal("18"))
    data.update(overrides)
    return Product(**data)


def test_add_item_merges_identical_lines():
    """Test that the same product and additions bump the quantity."""
    cart = Cart()
    cart.add_item(_burger(), 1, [BACON, CHEDDAR])
    cart.add_item(_burger(), 2, [CHEDDAR, BACON])
    
    assert len(cart) == 1
    assert cart.item_count == 3


def test_add_item_keeps_different_lines():
    """Test that different additions make separate lines."""
    cart = Cart()
    cart.add_item(_burger(), 1, [BACON])
    cart.add_item(_burger(), 1, [CHEDDAR])
    cart.add_item(_burger(), 1, [BACON], observations="sem cebola")
    
    assert len(cart) == 3
    assert cart.total() == Decimal("18") * 3 + Decimal("4") * 2 + Decimal("3")


def test_quantity_is_capped():
    """Test the per-order quantity limit."""
    cart = Cart()
    line = cart.add_item(_burger(max_quantity_per_order=3), 5)
    assert line.quantity == 3
    
    cart.add_item(_burger(max_quantity_per_order=3), 1)
    assert cart.item_count == 3
    
    assert cart.update_quantity(line.key, 10).quantity == 3


def test_update_quantity_to_zero_removes_line():
    """Test removal through quantity updates."""
    cart = Cart()
    line = cart.add_item(_burger(), 2)
    
    assert cart.update_quantity(line.key, 0) is None
    assert len(cart) == 0


def test_update_unknown_line_raises():
    """Test that updating a missing line is an error."""
    with pytest.raises(CartError):
        Cart().update_quantity("missing", 2)


def test_unavailable_product_raises():
    """Test that unavailable products cannot be added."""
    with pytest.raises(CartError):
        Cart().add_item(_burger(available=False))


def test_observations_dropped_when_not_allowed():
    """Test that notes are discarded for products that do not accept them."""
    line = Cart().add_item(_burger(allows_observations=False), observations="bem passado")
    assert line.observations is None


def test_remove_and_clear():
    """Test line removal and cart clearing."""
    cart = Cart()
    first = cart.add_item(_burger(), 1, [BACON])
    cart.add_item(_burger(), 1)
    
    cart.remove_item(first.key)
    assert len(cart) == 1
    assert cart.get(first.key) is None
    
    cart.clear()
    assert cart.item_count == 0
    assert cart.total() == Decimal("0")


def test_cart_total_with_flavors(pizza):
    """Test cart totals with rule-based flavor pricing."""
    group = pizza.option_groups[0]
    flavors = SelectionService.toggle_option(group, None, "calabresa")
    flavors = SelectionService.toggle_option(group, flavors, "portuguesa")
    
    cart = Cart()
    cart.add_item(pizza, 2, [pizza.additions[0]], [flavors])
    
    assert cart.total(PricingCapability(auto_pricing=True)) == Decimal("76")
    assert cart.total(PricingCapability(auto_pricing=False)) == Decimal("102")
