"""User model for storefront customers and staff.

Extends Django's `AbstractUser` with a unique, normalized email, an optional
phone number and a verification flag. Staff users (`is_staff`) are the store
administrators.
"""

from django.contrib.auth.models import AbstractUser
from django.core.validators import RegexValidator
from django.db import models


class User(AbstractUser):
    """Custom user with unique email and optional E.164 phone."""

    email = models.EmailField(unique=True)
    phone = models.CharField(
        max_length=16,
        blank=True,
        validators=[RegexValidator(r"^\+?[1-9]\d{1,14}$", message="Use E.164 format (e.g., +14155552671)")],
        help_text="Primary contact number for the account in E.164 format",
    )
    is_verified = models.BooleanField(default=False)

    def save(self, *args, **kwargs):
        """Normalize email and phone, defaulting the username to the email."""
        if self.email:
            self.email = self.email.strip().lower()
        if not self.username and self.email:
            self.username = self.email[:150]
        if self.phone:
            self.phone = self.phone.strip()
        super().save(*args, **kwargs)

    @property
    def is_admin(self) -> bool:
        return bool(self.is_staff)

    def __str__(self) -> str:  # pragma: no cover
        return self.email or self.username
