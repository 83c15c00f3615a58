"""Money helpers shared by cart estimates and order totals."""

from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """Round to cents, half-up."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def tax_on(subtotal: Decimal) -> Decimal:
    return to_money(Decimal(subtotal) * Decimal(str(settings.ORDER_TAX_RATE)))


def shipping_flat() -> Decimal:
    return to_money(Decimal(str(settings.ORDER_SHIPPING_FLAT)))
