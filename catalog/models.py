"""Catalog app models.

Categories, products and customer reviews. Product media, tags and
specifications live in JSON columns whose shape is enforced by
`common.json_fields` (see the `*_list` / `*_map` accessors below).
"""

from decimal import Decimal

from common.json_fields import coerce_string_list, coerce_string_map
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Category(TimeStampedModel):
    """Top-level product grouping (Rings, Necklaces, ...)."""

    name = models.CharField(max_length=120)
    slug = models.SlugField(max_length=140, unique=True)
    description = models.TextField(blank=True)
    image_url = models.URLField(max_length=500, blank=True)
    is_active = models.BooleanField(default=True, db_index=True)
    sort_order = models.IntegerField(default=0)

    class Meta:
        ordering = ["sort_order", "name"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:  # pragma: no cover
        return self.name


class Product(TimeStampedModel):
    """Sellable catalog item with its own stock counter.

    `stock_quantity` never goes negative: a check constraint backs the
    service-level stock checks, so a decrement that would oversell fails
    the surrounding transaction.
    """

    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True)
    description = models.TextField(blank=True)
    short_description = models.CharField(max_length=500, blank=True)
    sku = models.CharField(max_length=64, unique=True, null=True, blank=True)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    compare_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    stock_quantity = models.PositiveIntegerField(default=0)
    low_stock_threshold = models.PositiveIntegerField(default=5)
    category = models.ForeignKey(
        Category,
        null=True,
        blank=True,
        related_name="products",
        on_delete=models.SET_NULL,
    )
    is_active = models.BooleanField(default=True, db_index=True)
    is_featured = models.BooleanField(default=False, db_index=True)
    is_bestseller = models.BooleanField(default=False)
    is_new_arrival = models.BooleanField(default=False)
    images = models.JSONField(default=list, blank=True)
    tags = models.JSONField(default=list, blank=True)
    specifications = models.JSONField(default=dict, blank=True)
    meta_title = models.CharField(max_length=200, blank=True)
    meta_description = models.TextField(blank=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                name="product_stock_non_negative",
                condition=models.Q(stock_quantity__gte=0),
            ),
            models.CheckConstraint(
                name="product_price_non_negative",
                condition=models.Q(price__gte=0),
            ),
        ]
        indexes = [
            models.Index(fields=["is_active", "category"], name="product_active_category_idx"),
            models.Index(fields=["is_active", "price"], name="product_active_price_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return self.name

    @property
    def image_list(self) -> list[str]:
        return coerce_string_list(self.images)

    @property
    def tag_list(self) -> list[str]:
        return coerce_string_list(self.tags)

    @property
    def specification_map(self) -> dict[str, str]:
        return coerce_string_map(self.specifications)

    @property
    def primary_image(self) -> str | None:
        images = self.image_list
        return images[0] if images else None

    @property
    def in_stock(self) -> bool:
        return self.stock_quantity > 0

    @property
    def is_low_stock(self) -> bool:
        return self.stock_quantity <= self.low_stock_threshold

    @property
    def discount_percentage(self) -> int:
        if not self.compare_price or self.compare_price <= self.price:
            return 0
        saved = (self.compare_price - self.price) / self.compare_price * Decimal("100")
        return int(saved.quantize(Decimal("1")))


class ProductReview(TimeStampedModel):
    """A customer's rating of a product; one per (product, user)."""

    product = models.ForeignKey(Product, related_name="reviews", on_delete=models.CASCADE)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="reviews", on_delete=models.CASCADE)
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    title = models.CharField(max_length=200, blank=True)
    comment = models.TextField(blank=True)
    is_approved = models.BooleanField(default=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["product", "user"], name="unique_review_per_user"),
            models.CheckConstraint(
                name="review_rating_range",
                condition=models.Q(rating__gte=1, rating__lte=5),
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"Review#{self.id} product={self.product_id} rating={self.rating}"
