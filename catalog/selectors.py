"""Selectors for the catalog domain.

Expose read-only query helpers to keep views thin and allow reuse across
APIs and services. Selectors should return querysets or lightweight data
structures and avoid side effects.
"""

from typing import Iterable, Optional

from django.db.models import Avg, Count, Q, QuerySet

from .models import Category, Product, ProductReview

SORT_FIELDS = {
    "created_at": "created_at",
    "price": "price",
    "name": "name",
    "rating": "average_rating",
}


def list_categories(ordering: Optional[Iterable[str]] = None) -> QuerySet[Category]:
    """Return active categories ordered by the provided fields.

    Defaults to sorting by ``sort_order`` then ``name``.
    """

    ordering = list(ordering or ("sort_order", "name"))
    return Category.objects.filter(is_active=True).order_by(*ordering)


def with_ratings(qs: QuerySet[Product]) -> QuerySet[Product]:
    """Annotate ``average_rating`` and ``review_count`` from approved reviews."""

    approved = Q(reviews__is_approved=True)
    return qs.annotate(
        average_rating=Avg("reviews__rating", filter=approved),
        review_count=Count("reviews", filter=approved, distinct=True),
    )


def list_products(*, sort: Optional[str] = None, order: Optional[str] = None) -> QuerySet[Product]:
    """Return active products with ratings, ordered by ``sort``/``order``.

    Unknown sort keys fall back to ``created_at``; order defaults to desc.
    Filtering (category, price range, search) is applied by
    ``catalog.filters.ProductFilter`` on top of this queryset.
    """

    field = SORT_FIELDS.get(sort or "", "created_at")
    prefix = "" if (order or "").lower() == "asc" else "-"
    qs = with_ratings(Product.objects.filter(is_active=True).select_related("category"))
    return qs.order_by(f"{prefix}{field}", "-id")


def search_products(qs: QuerySet[Product], term: str) -> QuerySet[Product]:
    term = (term or "").strip()
    if not term:
        return qs
    return qs.filter(
        Q(name__icontains=term)
        | Q(description__icontains=term)
        | Q(short_description__icontains=term)
        | Q(sku__icontains=term)
        | Q(tags__icontains=term)
    )


def featured_products(limit: int = 8) -> QuerySet[Product]:
    qs = Product.objects.filter(is_active=True, is_featured=True).select_related("category")
    return with_ratings(qs).order_by("-created_at")[:limit]


def get_product(identifier) -> Optional[Product]:
    """Return an active product by numeric id or slug, or None."""

    qs = with_ratings(Product.objects.filter(is_active=True).select_related("category"))
    identifier = str(identifier)
    lookup = {"pk": int(identifier)} if identifier.isascii() and identifier.isdigit() else {"slug": identifier}
    return qs.filter(**lookup).first()


def related_products(product: Product, limit: int = 4) -> QuerySet[Product]:
    """Other active products in the same category, newest first."""

    if product.category_id is None:
        return Product.objects.none()
    qs = Product.objects.filter(is_active=True, category_id=product.category_id).exclude(pk=product.pk)
    return qs.select_related("category").order_by("-created_at")[:limit]


def list_reviews(product: Product) -> QuerySet[ProductReview]:
    return product.reviews.filter(is_approved=True).select_related("user").order_by("-created_at")
