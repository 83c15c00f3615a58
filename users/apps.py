from django.apps import AppConfig


class UsersConfig(AppConfig):
    """Accounts: customers and staff, JWT authentication."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "users"
