"""Read helpers for carts."""

from decimal import Decimal

from common.money import tax_on, to_money
from django.db.models import Sum

from .models import Cart, CartItem


def cart_lines(cart: Cart):
    return cart.items.select_related("product", "product__category").order_by("id")


def cart_summary(cart: Cart) -> dict:
    """Lines plus item_count, subtotal, estimated_tax and total."""

    items = list(cart_lines(cart))
    subtotal = to_money(sum((item.line_total for item in items), Decimal("0.00")))
    tax = tax_on(subtotal)
    return {
        "id": cart.id,
        "items": items,
        "item_count": sum(item.quantity for item in items),
        "subtotal": subtotal,
        "estimated_tax": tax,
        "total": subtotal + tax,
    }


def cart_item_count(user) -> int:
    total = CartItem.objects.filter(cart__user=user).aggregate(n=Sum("quantity"))["n"]
    return total or 0
