"""In-memory customer cart."""

import logging
from decimal import Decimal
from typing import Iterable, List, Optional

from ..exceptions import CartError
from ..models.catalog import Addition, Product
from ..models.cart import CartLine, SelectedOptionGroup
from ..models.checkout import PricingCapability
from .pricing_service import PricingService

logger = logging.getLogger(__name__)


def _cap_quantity(product: Product, quantity: int) -> int:
    if product.max_quantity_per_order is not None:
        return min(quantity, product.max_quantity_per_order)
    return quantity


class Cart:
    """Ephemeral cart state held while a customer browses a menu."""
    
    def __init__(self, lines: Optional[Iterable[CartLine]] = None):
        self._lines: List[CartLine] = list(lines or [])
    
    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines)
    
    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines)
    
    def __len__(self) -> int:
        return len(self._lines)
    
    def get(self, key: str) -> Optional[CartLine]:
        for line in self._lines:
            if line.key == key:
                return line
        return None
    
    def add_item(
        self,
        product: Product,
        quantity: int = 1,
        additions: Iterable[Addition] = (),
        option_groups: Iterable[SelectedOptionGroup] = (),
        observations: Optional[str] = None
    ) -> CartLine:
        """Add a product, merging with an identical line when there is one."""
        if not product.available:
            raise CartError(f"Product '{product.name}' is not available")
        if quantity < 1:
            raise CartError(f"Quantity must be at least 1, got {quantity}")
        
        if observations and not product.allows_observations:
            logger.debug("Dropping observations for product %s", product.id)
            observations = None
        
        line = CartLine(
            product=product,
            quantity=_cap_quantity(product, quantity),
            selected_additions=list(additions),
            selected_option_groups=list(option_groups),
            observations=observations
        )
        
        for index, existing in enumerate(self._lines):
            if existing.key == line.key:
                merged = _cap_quantity(product, existing.quantity + quantity)
                self._lines[index] = existing.model_copy(update={'quantity': merged})
                return self._lines[index]
        
        self._lines.append(line)
        return line
    
    def remove_item(self, key: str) -> None:
        self._lines = [line for line in self._lines if line.key != key]
    
    def update_quantity(self, key: str, quantity: int) -> Optional[CartLine]:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(key)
            return None
        
        for index, line in enumerate(self._lines):
            if line.key == key:
                capped = _cap_quantity(line.product, quantity)
                self._lines[index] = line.model_copy(update={'quantity': capped})
                return self._lines[index]
        
        raise CartError(f"No cart line with key {key}")
    
    def clear(self) -> None:
        self._lines = []
    
    def total(self, capability: Optional[PricingCapability] = None) -> Decimal:
        return sum(
            (PricingService.resolve_line_total(line, capability) for line in self._lines),
            Decimal('0')
        )
