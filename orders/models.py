"""Orders app models.

An Order is created once per checkout. Its monetary fields are computed at
creation and never recomputed; OrderItems are immutable snapshots of the
product at the moment the order was placed.
"""

from decimal import Decimal

from common.choices import OrderStatus, PaymentStatus
from django.conf import settings
from django.db import models


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Order(TimeStampedModel):
    """Purchase order capturing a snapshot of a user's checkout.

    Totals are denormalized to support reporting and auditability.
    """

    STATUS_PENDING = OrderStatus.PENDING
    STATUS_PROCESSING = OrderStatus.PROCESSING
    STATUS_SHIPPED = OrderStatus.SHIPPED
    STATUS_DELIVERED = OrderStatus.DELIVERED
    STATUS_CANCELLED = OrderStatus.CANCELLED
    STATUS_REFUNDED = OrderStatus.REFUNDED
    STATUS_CHOICES = OrderStatus.choices

    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="orders", on_delete=models.PROTECT)
    order_number = models.CharField(max_length=32, unique=True)
    email = models.EmailField(blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    payment_status = models.CharField(
        max_length=16, choices=PaymentStatus.choices, default=PaymentStatus.PENDING, db_index=True
    )
    payment_method = models.CharField(max_length=32, blank=True)
    payment_intent_id = models.CharField(max_length=255, blank=True, db_index=True)
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    shipping_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    shipping_address = models.JSONField(default=dict, blank=True)
    billing_address = models.JSONField(default=dict, blank=True)
    notes = models.TextField(blank=True)
    tracking_number = models.CharField(max_length=100, blank=True)
    # Set once the line quantities have been returned to stock
    stock_restored = models.BooleanField(default=False)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "status", "created_at"], name="order_user_status_created_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.order_number} user={self.user_id} status={self.status}"


class OrderItem(TimeStampedModel):
    """Line item within an order.

    The product reference is nullable so the snapshot survives product deletion.
    """

    order = models.ForeignKey(Order, related_name="items", on_delete=models.CASCADE)
    product = models.ForeignKey(
        "catalog.Product", null=True, blank=True, related_name="order_items", on_delete=models.SET_NULL
    )
    product_name = models.CharField(max_length=200)
    product_sku = models.CharField(max_length=64, blank=True)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    quantity = models.PositiveIntegerField()
    total_price = models.DecimalField(max_digits=12, decimal_places=2)
    variant_details = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(name="order_item_quantity_positive", condition=models.Q(quantity__gte=1)),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"OrderItem#{self.id} order={self.order_id} product={self.product_id} qty={self.quantity}"
