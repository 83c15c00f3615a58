"""Account service functions used by the users views."""

from urllib.parse import urlencode

from common.exceptions import ConflictError, ValidationFailed
from django.conf import settings
from django.core.mail import send_mail
from django.db.models import ProtectedError


def build_frontend_url(path: str, query: dict | None = None) -> str:
    """Construct a storefront URL from `FRONTEND_URL` and a path."""
    base = (getattr(settings, "FRONTEND_URL", "") or "").rstrip("/")
    url = f"{base}{path}"
    if query:
        url = f"{url}?{urlencode(query)}"
    return url


def send_welcome_email(user) -> None:
    """Greet a newly registered customer. Delivery failures are not fatal."""
    name = user.first_name or user.email
    send_mail(
        subject="Welcome to Luxe",
        message=(
            f"Hello {name},\n\n"
            "Thank you for creating an account with us.\n"
            f"Browse the latest collection: {build_frontend_url('/products')}\n"
        ),
        from_email=None,
        recipient_list=[user.email],
        fail_silently=True,
    )


def change_password(*, user, new_password: str) -> None:
    user.set_password(new_password)
    user.save(update_fields=["password"])


def delete_user(*, actor, user) -> None:
    """Delete an account on behalf of an administrator.

    Accounts with order history are protected; deactivate them instead.
    """
    if actor.pk == user.pk:
        raise ValidationFailed("You cannot delete your own account.", code="cannot_delete_self")
    try:
        user.delete()
    except ProtectedError:
        raise ConflictError("User has orders and cannot be deleted; deactivate the account instead.")
