"""URL routes for the wishlist, mounted at /api/v1/wishlist/."""

from django.urls import path

from .views import WishlistCheckView, WishlistEntryView, WishlistProductView, WishlistView

urlpatterns = [
    path("", WishlistView.as_view(), name="wishlist"),
    path("items/<int:entry_id>/", WishlistEntryView.as_view(), name="wishlist-entry"),
    path("products/<int:product_id>/", WishlistProductView.as_view(), name="wishlist-product"),
    path("check/<int:product_id>/", WishlistCheckView.as_view(), name="wishlist-check"),
]
