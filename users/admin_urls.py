"""Admin user management routes under /api/v1/admin/users/."""

from django.urls import path

from .admin_views import UserAdminDetailView, UserAdminListView

urlpatterns = [
    path("", UserAdminListView.as_view(), name="admin-user-list"),
    path("<int:user_id>/", UserAdminDetailView.as_view(), name="admin-user-detail"),
]
