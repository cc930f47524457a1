"""Order total aggregation: delivery fee, coupon discount and minimum order."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..config import pricing_config
from ..models.cart import CartLine
from ..models.checkout import (
    COUPON_MESSAGES,
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
from ..models.establishment import Establishment
from ..utils.time_utils import ensure_aware, resolve_now
from .pricing_service import PricingService

logger = logging.getLogger(__name__)

ZERO = Decimal('0')


def _normalize_neighborhood(name: Optional[str]) -> str:
    return (name or '').strip().casefold()


class OrderService:
    """Stateless checkout computations."""
    
    @staticmethod
    def resolve_subtotal(
        lines: Iterable[CartLine],
        capability: Optional[PricingCapability] = None
    ) -> Decimal:
        return sum((PricingService.resolve_line_total(line, capability) for line in lines), ZERO)
    
    @staticmethod
    def find_zone(neighborhood: Optional[str], zones: Iterable[DeliveryZone]) -> Optional[DeliveryZone]:
        """Find the active zone for a neighborhood, ignoring case and padding."""
        wanted = _normalize_neighborhood(neighborhood)
        if not wanted:
            return None
        for zone in zones:
            if zone.is_active and _normalize_neighborhood(zone.neighborhood) == wanted:
                return zone
        return None
    
    @staticmethod
    def resolve_delivery_fee(
        subtotal: Decimal,
        establishment: Establishment,
        delivery: DeliveryContext,
        zones: Iterable[DeliveryZone] = (),
        other_neighborhood: Optional[str] = None
    ) -> DeliveryFeeResult:
        """Resolve the delivery fee; the first matching rule wins.
        
        1. pickup orders pay nothing
        2. subtotal at or above the free-delivery minimum pays nothing
        3. a matching zone charges its fee (nothing for free zones)
        4. the "other neighborhood" choice pays nothing now; the
           establishment confirms the fee with the customer
        5. otherwise the establishment's flat fee applies
        """
        if delivery.delivery_type == 'pickup':
            return DeliveryFeeResult(fee=ZERO, reason=DeliveryReason.PICKUP)
        
        if establishment.free_delivery_min is not None and subtotal >= establishment.free_delivery_min:
            return DeliveryFeeResult(fee=ZERO, reason=DeliveryReason.FREE_THRESHOLD)
        
        zone = OrderService.find_zone(delivery.neighborhood, zones)
        if zone:
            reason = DeliveryReason.ZONE_FREE if zone.delivery_type == 'free' else DeliveryReason.ZONE
            return DeliveryFeeResult(fee=zone.effective_fee, reason=reason, zone=zone)
        
        sentinel = other_neighborhood or pricing_config.other_neighborhood
        if delivery.neighborhood and _normalize_neighborhood(delivery.neighborhood) == _normalize_neighborhood(sentinel):
            return DeliveryFeeResult(fee=ZERO, reason=DeliveryReason.TO_BE_CONFIRMED)
        
        return DeliveryFeeResult(fee=establishment.delivery_fee, reason=DeliveryReason.DEFAULT)
    
    @staticmethod
    def check_coupon(
        coupon: Coupon,
        subtotal: Decimal,
        now: Optional[datetime] = None
    ) -> CouponCheck:
        """Validate a coupon snapshot and derive its discount."""
        now = resolve_now(now)
        
        rejection = None
        if not coupon.is_active:
            rejection = CouponRejection.INACTIVE
        elif coupon.expires_at is not None and ensure_aware(coupon.expires_at) < now:
            rejection = CouponRejection.EXPIRED
        elif coupon.max_uses is not None and coupon.current_uses >= coupon.max_uses:
            rejection = CouponRejection.EXHAUSTED
        elif coupon.min_order_value is not None and subtotal < coupon.min_order_value:
            rejection = CouponRejection.BELOW_MINIMUM
        
        if rejection:
            logger.info("Coupon %s rejected: %s", coupon.code, rejection.value)
            return CouponCheck(
                code=coupon.code,
                applied=False,
                reason=rejection,
                message=COUPON_MESSAGES[rejection]
            )
        
        if coupon.discount_type == 'percentage':
            discount = subtotal * coupon.discount_value / 100
        else:
            # Fixed discounts may exceed the subtotal
            discount = coupon.discount_value
        
        return CouponCheck(code=coupon.code, applied=True, discount=discount)
    
    @staticmethod
    def resolve_order_total(
        lines: Sequence[CartLine],
        establishment: Establishment,
        delivery: Optional[DeliveryContext] = None,
        coupon: Optional[Coupon] = None,
        zones: Iterable[DeliveryZone] = (),
        capability: Optional[PricingCapability] = None,
        now: Optional[datetime] = None
    ) -> OrderTotals:
        """Compute subtotal, delivery fee, discount and grand total."""
        delivery = delivery or DeliveryContext()
        
        subtotal = OrderService.resolve_subtotal(lines, capability)
        fee = OrderService.resolve_delivery_fee(subtotal, establishment, delivery, zones)
        
        coupon_check = None
        discount = ZERO
        if coupon is not None:
            coupon_check = OrderService.check_coupon(coupon, subtotal, now)
            discount = coupon_check.discount
        
        min_order_value = establishment.min_order_value
        validations = OrderValidations(
            is_order_valid=subtotal >= min_order_value,
            min_order_value=min_order_value,
            missing_for_minimum=max(min_order_value - subtotal, ZERO),
            coupon=coupon_check,
            delivery_reason=fee.reason
        )
        
        return OrderTotals(
            subtotal=subtotal,
            delivery_fee=fee.fee,
            discount=discount,
            grand_total=subtotal + fee.fee - discount,
            validations=validations
        )
