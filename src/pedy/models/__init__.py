"""Pricing data models."""

from .catalog import Addition, Option, OptionGroup, Product
from .cart import (
    CartLine,
    FlavorSelection,
    GroupValidation,
    MultipleSelection,
    SelectedOption,
    SelectedOptionGroup,
    SingleSelection,
)
from .checkout import (
    Coupon,
    CouponCheck,
    CouponRejection,
    DeliveryContext,
    DeliveryFeeResult,
    DeliveryReason,
    DeliveryZone,
    OrderTotals,
    OrderValidations,
    PricingCapability,
)
from .establishment import BusinessHour, BusinessStatus, Establishment, FeatureAccess, MenuSnapshot
from .request import CartItemRequest, CartRequest, CheckoutQuote

__all__ = [
    'Addition', 'Option', 'OptionGroup', 'Product',
    'CartLine', 'FlavorSelection', 'GroupValidation', 'MultipleSelection', 'SelectedOption',
    'SelectedOptionGroup', 'SingleSelection',
    'Coupon', 'CouponCheck', 'CouponRejection', 'DeliveryContext', 'DeliveryFeeResult',
    'DeliveryReason', 'DeliveryZone', 'OrderTotals', 'OrderValidations', 'PricingCapability',
    'BusinessHour', 'BusinessStatus', 'Establishment', 'FeatureAccess', 'MenuSnapshot',
    'CartItemRequest', 'CartRequest', 'CheckoutQuote',
]
