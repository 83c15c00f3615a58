"""Admin routes for orders, mounted at /api/v1/admin/orders/."""

from django.urls import path

from .admin_views import AdminOrderDetailView, AdminOrderListView, AdminOrderStatusView

urlpatterns = [
    path("", AdminOrderListView.as_view(), name="admin-order-list"),
    path("<int:order_id>/", AdminOrderDetailView.as_view(), name="admin-order-detail"),
    path("<int:order_id>/status/", AdminOrderStatusView.as_view(), name="admin-order-status"),
]
