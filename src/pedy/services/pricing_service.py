"""Option-group and cart-line pricing."""

import logging
from decimal import Decimal
from typing import Optional

from ..models.cart import CartLine, FlavorSelection, SelectedOptionGroup
from ..models.checkout import PricingCapability

logger = logging.getLogger(__name__)

ZERO = Decimal('0')


class PricingService:
    """Pure price computations over cart selections."""
    
    @staticmethod
    def has_auto_pricing(
        group: FlavorSelection,
        capability: Optional[PricingCapability] = None
    ) -> bool:
        """Whether rule-based pricing may be applied to a flavor selection.
        
        An explicit capability wins. Without one, the entitlement recorded
        on the selection must be ``True``; a missing flag counts as no
        entitlement.
        """
        if capability is not None:
            return capability.auto_pricing
        return group.has_auto_pricing is True
    
    @staticmethod
    def resolve_group_price(
        group: SelectedOptionGroup,
        capability: Optional[PricingCapability] = None
    ) -> Decimal:
        """Return an option group's contribution to the unit price."""
        prices = group.prices
        if not prices:
            return ZERO
        
        if isinstance(group, FlavorSelection) and group.price_rule:
            if PricingService.has_auto_pricing(group, capability):
                if group.price_rule == 'average':
                    return sum(prices, ZERO) / len(prices)
                if group.price_rule == 'highest':
                    return max(prices)
            elif group.price_rule != 'sum':
                logger.debug(
                    "Group %s: '%s' rule needs auto pricing, summing instead",
                    group.group_id, group.price_rule
                )
        
        return sum(prices, ZERO)
    
    @staticmethod
    def resolve_unit_price(
        line: CartLine,
        capability: Optional[PricingCapability] = None
    ) -> Decimal:
        """Price of one unit with its additions and options."""
        additions = sum((addition.price for addition in line.selected_additions), ZERO)
        options = sum(
            (PricingService.resolve_group_price(group, capability) for group in line.selected_option_groups),
            ZERO
        )
        return line.product.effective_price + additions + options
    
    @staticmethod
    def resolve_line_total(
        line: CartLine,
        capability: Optional[PricingCapability] = None
    ) -> Decimal:
        """Total for a cart line, scaled by its quantity."""
        return PricingService.resolve_unit_price(line, capability) * line.quantity
