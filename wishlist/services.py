"""Wishlist services.

Entries pointing at deactivated products are pruned on read, and in bulk
by the ``cleanup_wishlists`` management command.
"""

import logging

from catalog.models import Product
from common.exceptions import AlreadyExists, NotFound
from django.db import IntegrityError, transaction
from django.db.models import QuerySet

from .models import WishlistItem

logger = logging.getLogger("luxe.wishlist")


def prune_inactive(*, user=None) -> int:
    """Delete entries whose product is inactive. Returns the number removed."""

    qs = WishlistItem.objects.filter(product__is_active=False)
    if user is not None:
        qs = qs.filter(user=user)
    removed, _ = qs.delete()
    if removed:
        logger.info(
            "wishlist.pruned",
            extra={"event": "wishlist.pruned", "user_id": getattr(user, "id", None), "removed": removed},
        )
    return removed


def list_wishlist(*, user) -> QuerySet[WishlistItem]:
    prune_inactive(user=user)
    return WishlistItem.objects.filter(user=user).select_related("product", "product__category")


def add_to_wishlist(*, user, product_id: int) -> WishlistItem:
    product = Product.objects.filter(pk=product_id, is_active=True).first()
    if product is None:
        raise NotFound("Product not found")
    if WishlistItem.objects.filter(user=user, product=product).exists():
        raise AlreadyExists("Product already in wishlist")
    try:
        with transaction.atomic():
            entry = WishlistItem.objects.create(user=user, product=product)
    except IntegrityError as exc:
        raise AlreadyExists("Product already in wishlist") from exc
    logger.info("wishlist.added", extra={"event": "wishlist.added", "user_id": user.id, "product_id": product.id})
    return entry


def remove_by_entry_id(*, user, entry_id: int) -> None:
    deleted, _ = WishlistItem.objects.filter(pk=entry_id, user=user).delete()
    if not deleted:
        raise NotFound("Wishlist item not found")
    logger.info("wishlist.removed", extra={"event": "wishlist.removed", "user_id": user.id, "entry_id": entry_id})


def remove_by_product_id(*, user, product_id: int) -> None:
    deleted, _ = WishlistItem.objects.filter(product_id=product_id, user=user).delete()
    if not deleted:
        raise NotFound("Product not in wishlist")
    logger.info(
        "wishlist.removed", extra={"event": "wishlist.removed", "user_id": user.id, "product_id": product_id}
    )


def clear_wishlist(*, user) -> int:
    deleted, _ = WishlistItem.objects.filter(user=user).delete()
    return deleted


def is_in_wishlist(*, user, product_id: int) -> bool:
    return WishlistItem.objects.filter(user=user, product_id=product_id).exists()
