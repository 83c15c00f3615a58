"""Wishlist app models: a per-user set of saved products."""

from django.conf import settings
from django.db import models


class WishlistItem(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="wishlist_items", on_delete=models.CASCADE)
    product = models.ForeignKey("catalog.Product", related_name="wishlist_items", on_delete=models.CASCADE)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(fields=["user", "product"], name="unique_wishlist_product_per_user"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"WishlistItem#{self.id} user={self.user_id} product={self.product_id}"
