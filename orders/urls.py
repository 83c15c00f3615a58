"""URL routes for the orders app (v1)."""

from django.urls import path

from .views import OrderCancelView, OrderCheckoutView, OrderDetailView, OrderListView

app_name = "orders"

urlpatterns = [
    path("", OrderListView.as_view(), name="order-list"),
    path("checkout/", OrderCheckoutView.as_view(), name="order-checkout"),
    path("<int:order_id>/", OrderDetailView.as_view(), name="order-detail"),
    path("<int:order_id>/cancel/", OrderCancelView.as_view(), name="order-cancel"),
]
