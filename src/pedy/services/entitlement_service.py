"""Plan tier feature gating."""

from datetime import datetime
from typing import Optional, Tuple

from ..models.checkout import PricingCapability
from ..models.establishment import Establishment, FeatureAccess
from ..utils.time_utils import ensure_aware, resolve_now


# Features reserved to the Pro plan (not available on Basic)
PRO_FEATURES = (
    'dashboard',
    'push_notifications',
    'coupons',
    'delivery_zones',
    'business_hours_config',
    'appearance_settings',
    'order_history',
)

# Features reserved to the Pro+ plan
PRO_PLUS_FEATURES = (
    'pizza_3_4_flavors',
    'dynamic_selection_limits',
    'advanced_pricing',
    'complex_combos',
    'option_dependencies',
    'product_customization',
)


class EntitlementService:
    """Decides which plan features an establishment may use."""
    
    @staticmethod
    def _in_trial(establishment: Establishment, now: datetime) -> bool:
        if establishment.plan_status != 'trial':
            return False
        if establishment.trial_end_date is None:
            return True
        return ensure_aware(establishment.trial_end_date) > now
    
    @staticmethod
    def check_pro_feature_access(
        establishment: Optional[Establishment],
        now: Optional[datetime] = None
    ) -> FeatureAccess:
        """Pro features: unlocked during a live trial and on Pro or Pro+ plans."""
        if establishment is None:
            return FeatureAccess(has_access=False, reason='locked')
        
        if EntitlementService._in_trial(establishment, resolve_now(now)):
            return FeatureAccess(has_access=True, reason='trial')
        
        plan_type = establishment.plan_type or 'basic'
        if plan_type in ('pro', 'pro_plus'):
            return FeatureAccess(has_access=True, reason=plan_type)
        
        return FeatureAccess(has_access=False, reason='locked')
    
    @staticmethod
    def check_feature_access(
        establishment: Optional[Establishment],
        now: Optional[datetime] = None
    ) -> FeatureAccess:
        """Pro+ features: unlocked during a live trial, on Pro+, or by the legacy flag."""
        if establishment is None:
            return FeatureAccess(has_access=False, reason='locked')
        
        if EntitlementService._in_trial(establishment, resolve_now(now)):
            return FeatureAccess(has_access=True, reason='trial')
        
        if establishment.plan_type == 'pro_plus' or establishment.has_pro_plus:
            return FeatureAccess(has_access=True, reason='pro_plus')
        
        return FeatureAccess(has_access=False, reason='locked')
    
    @staticmethod
    def pricing_capability(
        establishment: Optional[Establishment],
        now: Optional[datetime] = None
    ) -> PricingCapability:
        """Rule-based flavor pricing is an advanced-pricing (Pro+) feature."""
        access = EntitlementService.check_feature_access(establishment, now)
        return PricingCapability(auto_pricing=access.has_access)
    
    @staticmethod
    def is_establishment_active(
        establishment: Establishment,
        now: Optional[datetime] = None
    ) -> Tuple[bool, Optional[str]]:
        """Return ``(active, reason)`` where reason is 'trial_expired' or 'plan_expired'."""
        now = resolve_now(now)
        
        if establishment.plan_status == 'active':
            expires = establishment.plan_expires_at
            if expires is not None and ensure_aware(expires) <= now:
                return False, 'plan_expired'
            return True, None
        
        if establishment.plan_status == 'trial':
            trial_end = establishment.trial_end_date
            if trial_end is not None and ensure_aware(trial_end) <= now:
                return False, 'trial_expired'
            return True, None
        
        return False, 'plan_expired'
    
    @staticmethod
    def requires_pro_plus_for_flavors(max_flavors: int) -> bool:
        """Pizzas with more than two flavors are a Pro+ feature."""
        return max_flavors > 2
