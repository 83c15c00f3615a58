"""Root URL configuration. All API routes are versioned under /api/v1/."""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from .health import health

admin.site.site_header = "Luxe Admin"
admin.site.index_title = "Admin"

urlpatterns = [
    path("admin/", admin.site.urls),
    # API schema and Swagger UI
    path("api/schema/", SpectacularAPIView.as_view(), name="api-schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="api-schema"), name="api-docs"),
    # Healthcheck
    path("health/", health, name="health"),
    # Storefront
    path("api/v1/", include("users.urls")),
    path("api/v1/products/", include("catalog.urls")),
    path("api/v1/cart/", include("cart.urls")),
    path("api/v1/orders/", include("orders.urls")),
    path("api/v1/wishlist/", include("wishlist.urls")),
    path("api/v1/payments/", include("payments.urls")),
    # Admin API
    path("api/v1/admin/", include("catalog.admin_urls")),
    path("api/v1/admin/orders/", include("orders.admin_urls")),
    path("api/v1/admin/users/", include("users.admin_urls")),
    path("api/v1/admin/", include("analytics.urls")),
]
