"""Shared enumerations and choices used across apps."""

from django.db import models


class OrderStatus(models.TextChoices):
    """Lifecycle statuses for orders."""

    PENDING = "pending", "Pending"
    PROCESSING = "processing", "Processing"
    SHIPPED = "shipped", "Shipped"
    DELIVERED = "delivered", "Delivered"
    CANCELLED = "cancelled", "Cancelled"
    REFUNDED = "refunded", "Refunded"


class PaymentStatus(models.TextChoices):
    """Payment state of an order as reported by the payment gateway."""

    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"
    FAILED = "failed", "Failed"
    REFUNDED = "refunded", "Refunded"


class Currency(models.TextChoices):
    USD = "usd", "US Dollar"
    EUR = "eur", "Euro"
    GBP = "gbp", "Pound Sterling"


class RefundReason(models.TextChoices):
    DUPLICATE = "duplicate", "Duplicate"
    FRAUDULENT = "fraudulent", "Fraudulent"
    REQUESTED_BY_CUSTOMER = "requested_by_customer", "Requested by customer"


class AnalyticsPeriod(models.TextChoices):
    """Reporting windows accepted by the admin analytics endpoint."""

    LAST_24_HOURS = "24h", "Last 24 hours"
    LAST_7_DAYS = "7d", "Last 7 days"
    LAST_30_DAYS = "30d", "Last 30 days"
    LAST_90_DAYS = "90d", "Last 90 days"
    LAST_YEAR = "1y", "Last year"
