"""URL routes for the public catalog, mounted at /api/v1/products/."""

from django.urls import path

from .views import CategoryListView, FeaturedProductsView, ProductDetailView, ProductListView, ProductReviewsView

urlpatterns = [
    path("", ProductListView.as_view(), name="product-list"),
    path("featured/", FeaturedProductsView.as_view(), name="product-featured"),
    path("categories/", CategoryListView.as_view(), name="category-list"),
    path("<int:product_id>/reviews/", ProductReviewsView.as_view(), name="product-reviews"),
    path("<str:identifier>/", ProductDetailView.as_view(), name="product-detail"),
]
