"""Cart app models.

One persisted cart per user. Lines are keyed by (cart, product, variant):
the variant is the optional detail map chosen by the shopper (size, metal)
and is identified by `variant_key`, a digest of its canonical JSON form.
"""

import hashlib
import json
from decimal import Decimal

from common.json_fields import coerce_string_map
from django.conf import settings
from django.db import models


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


def variant_key_for(details) -> str:
    """Canonical key for a variant detail map; empty string when there is none."""

    details = coerce_string_map(details)
    if not details:
        return ""
    canonical = json.dumps(details, sort_keys=True, separators=(",", ":"))
    return hashlib.sha1(canonical.encode("utf-8")).hexdigest()


class Cart(TimeStampedModel):
    """Shopping cart bound to a user."""

    user = models.OneToOneField(settings.AUTH_USER_MODEL, related_name="cart", on_delete=models.CASCADE)

    class Meta:
        ordering = ["-updated_at"]

    def __str__(self) -> str:  # pragma: no cover
        return f"Cart#{self.id} ({self.user_id})"


class CartItem(TimeStampedModel):
    """Line item in a shopping cart for a product (and optional variant)."""

    cart = models.ForeignKey(Cart, related_name="items", on_delete=models.CASCADE)
    product = models.ForeignKey("catalog.Product", related_name="cart_items", on_delete=models.CASCADE)
    quantity = models.PositiveIntegerField(default=1)
    variant_details = models.JSONField(default=dict, blank=True)
    variant_key = models.CharField(max_length=40, blank=True, default="")

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["cart", "product", "variant_key"], name="unique_product_variant_per_cart"),
            models.CheckConstraint(
                name="cart_item_quantity_positive",
                condition=models.Q(quantity__gte=1),
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"CartItem#{self.id} cart={self.cart_id} product={self.product_id} qty={self.quantity}"

    def save(self, *args, **kwargs):
        self.variant_key = variant_key_for(self.variant_details)
        super().save(*args, **kwargs)

    @property
    def line_total(self) -> Decimal:
        return self.product.price * Decimal(int(self.quantity))
