"""Currency helpers for display rounding."""

from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal('0.01')


def round_currency(value) -> Decimal:
    """Round a money amount to cents, half up."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(value) -> str:
    """Format an amount as Brazilian reais, e.g. ``R$ 1.234,56``."""
    amount = round_currency(value)
    sign = '-' if amount < 0 else ''
    digits = f"{abs(amount):,.2f}"
    # '1,234.56' -> '1.234,56'
    digits = digits.replace(',', '_').replace('.', ',').replace('_', '.')
    return f"{sign}R$ {digits}"
