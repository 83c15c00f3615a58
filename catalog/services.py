"""Write operations for the catalog: reviews and admin stock changes."""

import logging

from common.exceptions import AlreadyExists, NotFound, ValidationFailed
from django.db import IntegrityError, transaction
from django.utils.text import slugify

from .models import Product, ProductReview

logger = logging.getLogger("luxe.catalog")


def unique_slug(name: str, *, model=Product, exclude_pk=None) -> str:
    """Slugify ``name`` and suffix ``-2``, ``-3``... until it is unused."""

    base = slugify(name)[:200] or "item"
    slug, n = base, 1
    qs = model.objects.all()
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    while qs.filter(slug=slug).exists():
        n += 1
        slug = f"{base}-{n}"
    return slug


def create_review(*, user, product_id: int, rating: int, title: str = "", comment: str = "") -> ProductReview:
    product = Product.objects.filter(pk=product_id, is_active=True).first()
    if product is None:
        raise NotFound("Product not found")
    if ProductReview.objects.filter(product=product, user=user).exists():
        raise AlreadyExists("You have already reviewed this product")
    try:
        with transaction.atomic():
            review = ProductReview.objects.create(
                product=product, user=user, rating=rating, title=title, comment=comment
            )
    except IntegrityError:
        raise AlreadyExists("You have already reviewed this product")
    logger.info(
        "review_created",
        extra={"event": "review_created", "product_id": product.id, "user_id": user.id, "rating": rating},
    )
    return review


@transaction.atomic
def set_stock(*, product_id: int, stock_quantity: int) -> Product:
    if stock_quantity < 0:
        raise ValidationFailed("stock_quantity must be >= 0")
    product = Product.objects.select_for_update().filter(pk=product_id).first()
    if product is None:
        raise NotFound("Product not found")
    previous = product.stock_quantity
    product.stock_quantity = stock_quantity
    product.save(update_fields=["stock_quantity", "updated_at"])
    logger.info(
        "stock_updated",
        extra={"event": "stock_updated", "product_id": product.id, "from": previous, "to": stock_quantity},
    )
    return product


def deactivate_product(*, product: Product) -> Product:
    product.is_active = False
    product.save(update_fields=["is_active", "updated_at"])
    logger.info("product_deactivated", extra={"event": "product_deactivated", "product_id": product.id})
    return product
