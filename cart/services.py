"""Cart services: mutations on the user's single persisted cart.

Stock is checked as a ceiling at add/update time only; nothing is reserved.
Stock is decremented when an order is placed (see ``orders.services``).
"""

import logging

from catalog.models import Product
from common.exceptions import InsufficientStock, InvalidQuantity, NotFound
from django.db import transaction

from .models import Cart, CartItem, variant_key_for

logger = logging.getLogger("luxe.cart")


def get_or_create_cart(user) -> Cart:
    cart, _ = Cart.objects.get_or_create(user=user)
    return cart


def _active_product(product_id) -> Product:
    product = Product.objects.filter(pk=product_id, is_active=True).first()
    if product is None:
        raise NotFound("Product not found")
    return product


@transaction.atomic
def add_item(*, user, product_id: int, quantity: int, variant_details=None) -> CartItem:
    """Add a product to the user's cart, merging into an existing line.

    Raises InvalidQuantity, NotFound (missing/inactive product) or
    InsufficientStock when existing + requested exceeds stock.
    """

    if quantity is None or quantity < 1:
        raise InvalidQuantity()
    product = _active_product(product_id)
    cart = get_or_create_cart(user)
    key = variant_key_for(variant_details)
    item = CartItem.objects.select_for_update().filter(cart=cart, product=product, variant_key=key).first()
    existing = item.quantity if item else 0
    if existing + quantity > product.stock_quantity:
        raise InsufficientStock(f"Insufficient stock. Available: {product.stock_quantity}")

    if item:
        item.quantity = existing + quantity
        item.save(update_fields=["quantity", "variant_key", "updated_at"])
    else:
        item = CartItem.objects.create(
            cart=cart, product=product, quantity=quantity, variant_details=variant_details or {}
        )
    logger.info(
        "cart.item_added",
        extra={
            "event": "cart.item_added",
            "cart_id": cart.id,
            "user_id": user.id,
            "product_id": product.id,
            "quantity": item.quantity,
        },
    )
    return item


@transaction.atomic
def update_item_quantity(*, user, item_id: int, quantity: int) -> CartItem:
    if quantity is None or quantity < 1:
        raise InvalidQuantity()
    item = CartItem.objects.select_for_update().select_related("product").filter(pk=item_id, cart__user=user).first()
    if item is None:
        raise NotFound("Cart item not found")
    if quantity > item.product.stock_quantity:
        raise InsufficientStock(f"Insufficient stock. Available: {item.product.stock_quantity}")
    item.quantity = quantity
    item.save(update_fields=["quantity", "variant_key", "updated_at"])
    logger.info(
        "cart.item_updated",
        extra={"event": "cart.item_updated", "item_id": item.id, "user_id": user.id, "quantity": quantity},
    )
    return item


@transaction.atomic
def remove_item(*, user, item_id: int) -> None:
    deleted, _ = CartItem.objects.filter(pk=item_id, cart__user=user).delete()
    if not deleted:
        raise NotFound("Cart item not found")
    logger.info("cart.item_removed", extra={"event": "cart.item_removed", "item_id": item_id, "user_id": user.id})


@transaction.atomic
def clear_cart(*, user) -> int:
    """Delete every line in the user's cart. Returns the number removed."""

    deleted, _ = CartItem.objects.filter(cart__user=user).delete()
    if deleted:
        logger.info("cart.cleared", extra={"event": "cart.cleared", "user_id": user.id, "removed": deleted})
    return deleted


@transaction.atomic
def merge_guest_cart(*, user, guest_items) -> dict:
    """Fold a client-held cart into the persisted one.

    Missing, inactive or out-of-stock products are skipped; other lines are
    merged with their quantity capped at current stock. One bad line never
    fails the whole merge.
    """

    cart = get_or_create_cart(user)
    merged = skipped = 0
    for entry in guest_items or []:
        try:
            product_id = int(entry.get("product_id"))
            requested = int(entry.get("quantity") or 1)
        except (AttributeError, TypeError, ValueError):
            skipped += 1
            continue
        product = Product.objects.filter(pk=product_id, is_active=True).first()
        if product is None or product.stock_quantity <= 0 or requested < 1:
            skipped += 1
            continue

        details = entry.get("variant_details") or {}
        key = variant_key_for(details)
        item = CartItem.objects.select_for_update().filter(cart=cart, product=product, variant_key=key).first()
        existing = item.quantity if item else 0
        quantity = min(existing + requested, product.stock_quantity)
        if item:
            item.quantity = quantity
            item.save(update_fields=["quantity", "variant_key", "updated_at"])
        else:
            CartItem.objects.create(cart=cart, product=product, quantity=quantity, variant_details=details)
        merged += 1

    logger.info(
        "cart.merged",
        extra={"event": "cart.merged", "user_id": user.id, "merged_items": merged, "skipped_items": skipped},
    )
    return {"merged_items": merged, "skipped_items": skipped}
