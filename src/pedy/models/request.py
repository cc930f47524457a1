"""Cart request and checkout quote models used by the command-line tool."""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from .cart import CartLine
from .checkout import DeliveryContext, OrderTotals, PricingCapability
from .establishment import BusinessStatus


class CartItemRequest(BaseModel):
    """A cart item referencing catalog records by ID."""
    
    product_id: str
    quantity: int = Field(default=1, ge=1)
    addition_ids: List[str] = Field(default_factory=list)
    options: Dict[str, List[str]] = Field(default_factory=dict)  # group ID -> option IDs
    observations: Optional[str] = None


class CartRequest(BaseModel):
    """A customer's cart and checkout choices."""
    
    items: List[CartItemRequest] = Field(default_factory=list)
    delivery: DeliveryContext = Field(default_factory=DeliveryContext)
    coupon_code: Optional[str] = None


class CheckoutQuote(BaseModel):
    """Totals for a cart plus the gating flags shown at checkout."""
    
    establishment_id: str
    lines: List[CartLine] = Field(default_factory=list)
    totals: OrderTotals
    business_status: BusinessStatus
    can_submit: bool
    scheduled_message: Optional[str] = None
    capability: PricingCapability = Field(default_factory=PricingCapability)  # used to price the lines
