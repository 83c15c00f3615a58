"""Aggregate user namespaces under /api/v1/.

Re-exports the "auth" and "account" URLconfs so the project includes a
single users entry point. Admin user management lives in `admin_urls`.
"""

from django.urls import include, path

urlpatterns = [
    path("auth/", include("users.auth_urls")),
    path("account/", include("users.account_urls")),
]
