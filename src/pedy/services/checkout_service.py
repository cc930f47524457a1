"""Checkout quotes: resolve a cart request against a menu snapshot."""

import logging
from datetime import datetime
from typing import Optional

from ..exceptions import SnapshotError
from ..models.cart import CartLine
from ..models.establishment import MenuSnapshot
from ..models.request import CartItemRequest, CartRequest, CheckoutQuote
from ..utils.time_utils import resolve_now
from .cart_service import Cart
from .entitlement_service import EntitlementService
from .hours_service import HoursService
from .order_service import OrderService
from .selection_service import SelectionService

logger = logging.getLogger(__name__)


class CheckoutService:
    """Calling layer between stored snapshots and the pricing core."""
    
    @staticmethod
    def build_cart(
        snapshot: MenuSnapshot,
        request: CartRequest,
        has_auto_pricing: Optional[bool] = None
    ) -> Cart:
        """Turn ID references into a cart of priced snapshots.
        
        Raises SnapshotError for unknown products, additions, groups or
        options, for repeated or unavailable options, for more options than
        a group allows, and for selections that break a group's rules.
        """
        cart = Cart()
        for item in request.items:
            CheckoutService._add_item(cart, snapshot, item, has_auto_pricing)
        return cart
    
    @staticmethod
    def _add_item(
        cart: Cart,
        snapshot: MenuSnapshot,
        item: CartItemRequest,
        has_auto_pricing: Optional[bool]
    ) -> CartLine:
        product = snapshot.find_product(item.product_id)
        if product is None:
            raise SnapshotError(f"Unknown product: {item.product_id}")
        
        additions = []
        for addition_id in item.addition_ids:
            addition = product.find_addition(addition_id)
            if addition is None:
                raise SnapshotError(f"Unknown addition '{addition_id}' for product {product.id}")
            additions.append(addition)
        
        selections = []
        for group_id, option_ids in item.options.items():
            group = product.find_option_group(group_id)
            if group is None:
                raise SnapshotError(f"Unknown option group '{group_id}' for product {product.id}")
            if len(set(option_ids)) != len(option_ids):
                raise SnapshotError(f"Duplicate option in group {group.id}: {option_ids}")
            if len(option_ids) > group.effective_max_selections:
                raise SnapshotError(
                    f"Too many options in group {group.id}: "
                    f"{len(option_ids)} given, at most {group.effective_max_selections} allowed"
                )
            
            options = []
            for option_id in option_ids:
                option = group.find_option(option_id)
                if option is None:
                    raise SnapshotError(f"Unknown option '{option_id}' in group {group.id}")
                if not option.is_available:
                    raise SnapshotError(f"Option '{option_id}' in group {group.id} is not available")
                options.append(option)
            
            selections.append(
                SelectionService.snapshot_group(group, options, has_auto_pricing=has_auto_pricing)
            )
        
        failures = SelectionService.validate_product(product, selections)
        if failures:
            details = ', '.join(f"{group_id}: {result.message}" for group_id, result in failures.items())
            raise SnapshotError(f"Invalid selection for product {product.id} ({details})")
        
        return cart.add_item(
            product,
            quantity=item.quantity,
            additions=additions,
            option_groups=selections,
            observations=item.observations
        )
    
    @staticmethod
    def quote(
        snapshot: MenuSnapshot,
        request: CartRequest,
        now: Optional[datetime] = None
    ) -> CheckoutQuote:
        """Price a cart request and report whether it may be submitted."""
        now = resolve_now(now)
        establishment = snapshot.establishment
        
        capability = EntitlementService.pricing_capability(establishment, now)
        cart = CheckoutService.build_cart(snapshot, request, capability.auto_pricing)
        
        coupon = None
        if request.coupon_code:
            coupon = snapshot.find_coupon(request.coupon_code)
            if coupon is None:
                raise SnapshotError(f"Unknown coupon: {request.coupon_code}")
        
        totals = OrderService.resolve_order_total(
            cart.lines,
            establishment,
            delivery=request.delivery,
            coupon=coupon,
            zones=snapshot.delivery_zones,
            capability=capability,
            now=now
        )
        
        status = HoursService.check_business_status(snapshot.business_hours, now)
        scheduled = None
        if not status.is_open:
            scheduled = HoursService.scheduled_order_message(
                establishment.allow_orders_when_closed,
                establishment.scheduled_order_message
            )
        
        active, _ = EntitlementService.is_establishment_active(establishment, now)
        can_submit = (
            active
            and len(cart) > 0
            and totals.validations.is_order_valid
            and (status.is_open or establishment.allow_orders_when_closed)
        )
        logger.debug("Quote for %s: total=%s can_submit=%s", establishment.id, totals.grand_total, can_submit)
        
        return CheckoutQuote(
            establishment_id=establishment.id,
            lines=cart.lines,
            totals=totals,
            business_status=status,
            can_submit=can_submit,
            scheduled_message=scheduled,
            capability=capability
        )
