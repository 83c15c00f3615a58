"""Authentication routes under /api/v1/auth/.

Registration, JWT obtain (sign-in), refresh, verify and sign-out (blacklist).
"""

from django.urls import path

from .views import RefreshView, SignInView, SignOutView, VerifyView, register

urlpatterns = [
    path("register/", register, name="register"),
    path("signin/", SignInView.as_view(), name="signin"),
    path("refresh/", RefreshView.as_view(), name="token_refresh"),
    path("verify/", VerifyView.as_view(), name="token_verify"),
    path("signout/", SignOutView.as_view(), name="signout"),
]
