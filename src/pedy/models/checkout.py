"""Checkout inputs and computed order totals."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


DiscountType = Literal['percentage', 'fixed']
ZoneDeliveryType = Literal['paid', 'free']
FulfillmentType = Literal['delivery', 'pickup']


class DeliveryReason(str, Enum):
    """Why the delivery fee resolved to its value."""
    
    PICKUP = 'pickup'
    FREE_THRESHOLD = 'free_threshold_met'
    ZONE = 'zone'
    ZONE_FREE = 'zone_free'
    TO_BE_CONFIRMED = 'to_be_confirmed'
    DEFAULT = 'default_fee'


class CouponRejection(str, Enum):
    """Why a coupon was not applied."""
    
    INACTIVE = 'inactive'
    EXPIRED = 'expired'
    EXHAUSTED = 'exhausted'
    BELOW_MINIMUM = 'below_minimum'


COUPON_MESSAGES = {
    CouponRejection.INACTIVE: 'Cupom inativo',
    CouponRejection.EXPIRED: 'Cupom expirado',
    CouponRejection.EXHAUSTED: 'Cupom esgotado',
    CouponRejection.BELOW_MINIMUM: 'Valor mínimo não atingido',
}


class PricingCapability(BaseModel):
    """Plan entitlement for rule-based flavor pricing."""
    
    model_config = ConfigDict(frozen=True)
    
    auto_pricing: bool = False


class Coupon(BaseModel):
    """Discount code with usage, expiry and minimum-order constraints."""
    
    code: str
    discount_type: DiscountType = 'percentage'
    discount_value: Decimal = Field(ge=0)
    min_order_value: Optional[Decimal] = Field(default=None, ge=0)
    max_uses: Optional[int] = Field(default=None, ge=0)
    current_uses: int = Field(default=0, ge=0)
    expires_at: Optional[datetime] = None
    is_active: bool = True
    
    @field_validator('code')
    @classmethod
    def _normalize_code(cls, value: str) -> str:
        return value.strip().upper()


class DeliveryZone(BaseModel):
    """Per-neighborhood delivery fee."""
    
    neighborhood: str
    delivery_type: ZoneDeliveryType = 'paid'
    fee: Decimal = Field(default=Decimal('0'), ge=0)
    is_active: bool = True
    
    @property
    def effective_fee(self) -> Decimal:
        if self.delivery_type == 'free':
            return Decimal('0')
        return self.fee


class DeliveryContext(BaseModel):
    """Customer's fulfillment choice at checkout."""
    
    delivery_type: FulfillmentType = 'delivery'
    neighborhood: Optional[str] = None


class DeliveryFeeResult(BaseModel):
    """Resolved delivery fee."""
    
    fee: Decimal
    reason: DeliveryReason
    zone: Optional[DeliveryZone] = None


class CouponCheck(BaseModel):
    """Outcome of validating a coupon against a subtotal."""
    
    code: Optional[str] = None
    applied: bool = False
    reason: Optional[CouponRejection] = None
    message: Optional[str] = None
    discount: Decimal = Decimal('0')


class OrderValidations(BaseModel):
    """Flags the caller must check before submitting an order."""
    
    is_order_valid: bool
    min_order_value: Decimal = Decimal('0')
    missing_for_minimum: Decimal = Decimal('0')
    coupon: Optional[CouponCheck] = None
    delivery_reason: DeliveryReason


class OrderTotals(BaseModel):
    """Final payable amounts for an order."""
    
    subtotal: Decimal
    delivery_fee: Decimal
    discount: Decimal
    grand_total: Decimal  # not floored at zero
    validations: OrderValidations
