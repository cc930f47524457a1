"""Establishment, opening hours and menu snapshot models."""

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from .catalog import Product
from .checkout import Coupon, DeliveryZone


PlanStatus = Literal['trial', 'active', 'expired']
PlanType = Literal['basic', 'pro', 'pro_plus']


class Establishment(BaseModel):
    """Establishment plan and checkout settings."""
    
    id: str
    name: str
    slug: Optional[str] = None
    whatsapp: Optional[str] = None
    plan_status: PlanStatus = 'trial'
    plan_type: Optional[PlanType] = None
    trial_end_date: Optional[datetime] = None
    plan_expires_at: Optional[datetime] = None
    has_pro_plus: bool = False  # legacy flag predating plan_type
    delivery_fee: Decimal = Field(default=Decimal('0'), ge=0)
    min_order_value: Decimal = Field(default=Decimal('0'), ge=0)
    free_delivery_min: Optional[Decimal] = Field(default=None, ge=0)
    allow_orders_when_closed: bool = False
    scheduled_order_message: Optional[str] = None


class BusinessHour(BaseModel):
    """Opening hours for one weekday (0 = Sunday)."""
    
    day_of_week: int = Field(ge=0, le=6)
    is_open: bool = True
    opening_time: Optional[str] = None  # 'HH:MM' or 'HH:MM:SS'
    closing_time: Optional[str] = None


class BusinessStatus(BaseModel):
    """Whether the establishment is open right now."""
    
    is_open: bool
    message: str
    today_hours: Optional[str] = None
    next_open_info: Optional[str] = None


class FeatureAccess(BaseModel):
    """Plan gating decision for a feature."""
    
    has_access: bool
    reason: Literal['trial', 'basic', 'pro', 'pro_plus', 'locked']


class MenuSnapshot(BaseModel):
    """Everything needed to quote a cart, as read from the catalog store."""
    
    establishment: Establishment
    products: List[Product] = Field(default_factory=list)
    delivery_zones: List[DeliveryZone] = Field(default_factory=list)
    coupons: List[Coupon] = Field(default_factory=list)
    business_hours: List[BusinessHour] = Field(default_factory=list)
    
    def find_product(self, product_id: str) -> Optional[Product]:
        for product in self.products:
            if product.id == product_id:
                return product
        return None
    
    def find_coupon(self, code: str) -> Optional[Coupon]:
        """Find a coupon by code, ignoring case and surrounding whitespace."""
        wanted = code.strip().upper()
        for coupon in self.coupons:
            if coupon.code == wanted:
                return coupon
        return None
