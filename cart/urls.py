"""URL routes for the cart app, mounted at /api/v1/cart/."""

from django.urls import path

from .views import CartAddItemView, CartClearView, CartCountView, CartDetailView, CartItemView, CartMergeView

urlpatterns = [
    path("", CartDetailView.as_view(), name="cart-detail"),
    path("count/", CartCountView.as_view(), name="cart-count"),
    path("add/", CartAddItemView.as_view(), name="cart-add"),
    path("items/<int:item_id>/", CartItemView.as_view(), name="cart-item"),
    path("clear/", CartClearView.as_view(), name="cart-clear"),
    path("merge/", CartMergeView.as_view(), name="cart-merge"),
]
