"""Account routes under /api/v1/account/."""

from django.urls import path

from .views import password_change, profile

urlpatterns = [
    path("profile/", profile, name="profile"),
    path("change-password/", password_change, name="password_change"),
]
