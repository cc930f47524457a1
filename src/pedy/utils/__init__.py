"""Pricing utilities."""

from .key_utils import generate_cart_line_key
from .currency import format_currency, round_currency
from .time_utils import ensure_aware, resolve_now

__all__ = ['generate_cart_line_key', 'format_currency', 'round_currency', 'ensure_aware', 'resolve_now']
