"""Pricing services."""

from .pricing_service import PricingService
from .order_service import OrderService
from .selection_service import SelectionService
from .cart_service import Cart
from .entitlement_service import EntitlementService
from .hours_service import HoursService
from .checkout_service import CheckoutService

__all__ = [
    'PricingService', 'OrderService', 'SelectionService', 'Cart',
    'EntitlementService', 'HoursService', 'CheckoutService',
]
