"""Order services: checkout and the order lifecycle.

`checkout` turns a list of priced line items into one persisted Order in a
single transaction: the Order row, one OrderItem snapshot per line and the
stock decrement for each line either all commit or none do.
"""

import logging
import string
import time
from decimal import Decimal
from typing import Optional

from cart.models import CartItem
from catalog.models import Product
from common.choices import OrderStatus, PaymentStatus
from common.exceptions import CheckoutFailed, InsufficientStock, InvalidQuantity, NotFound, ValidationFailed
from common.money import shipping_flat, tax_on, to_money
from django.db import DEFAULT_DB_ALIAS, DatabaseError, transaction
from django.db.models import F, QuerySet
from django.utils.crypto import get_random_string

from .emails import send_order_confirmation_email, send_order_status_email
from .models import Order, OrderItem

logger = logging.getLogger("luxe.orders")

ORDER_NUMBER_CHARS = string.ascii_uppercase + string.digits


def compute_totals(items) -> dict:
    """Subtotal, tax, shipping and total for caller-priced lines.

    Tax is ORDER_TAX_RATE of the subtotal rounded half-up to cents;
    shipping is ORDER_SHIPPING_FLAT.
    """

    subtotal = to_money(sum((Decimal(i["price"]) * int(i["quantity"]) for i in items), Decimal("0.00")))
    tax = tax_on(subtotal)
    shipping = shipping_flat()
    return {"subtotal": subtotal, "tax": tax, "shipping": shipping, "total": subtotal + tax + shipping}


def generate_order_number() -> str:
    """``ORD-<epoch millis>-<9 uppercase alphanumerics>``."""

    return f"ORD-{int(time.time() * 1000)}-{get_random_string(9, allowed_chars=ORDER_NUMBER_CHARS)}"


def _demand(items) -> dict[int, int]:
    demand: dict[int, int] = {}
    for item in items:
        demand[item["product_id"]] = demand.get(item["product_id"], 0) + item["quantity"]
    return demand


def _validate_items(items, *, using) -> dict[int, Product]:
    if not items:
        raise ValidationFailed("Order must contain at least one item")
    for item in items:
        if int(item.get("quantity") or 0) < 1:
            raise InvalidQuantity()
        if Decimal(item["price"]) < 0:
            raise ValidationFailed("Item price must be >= 0")

    demand = _demand(items)
    products = Product.objects.using(using).in_bulk(list(demand))
    for product_id, needed in demand.items():
        product = products.get(product_id)
        if product is None or not product.is_active:
            raise NotFound(f"Product {product_id} not found")
        if product.stock_quantity < needed:
            raise InsufficientStock(f"Insufficient stock for {product.name}")
    return products


def _record_line(*, order: Order, product: Product, line: dict, using: str) -> OrderItem:
    """Snapshot one line onto the order and take its quantity out of stock."""

    quantity = int(line["quantity"])
    unit_price = to_money(line["price"])
    item = OrderItem.objects.using(using).create(
        order=order,
        product=product,
        product_name=product.name,
        product_sku=product.sku or "",
        unit_price=unit_price,
        quantity=quantity,
        total_price=to_money(unit_price * quantity),
        variant_details=line.get("variant_details") or {},
    )
    Product.objects.using(using).filter(pk=product.pk).update(stock_quantity=F("stock_quantity") - quantity)
    return item


def _after_checkout(order: Order) -> None:
    logger.info(
        "order_created",
        extra={
            "event": "order_created",
            "order_id": order.id,
            "order_number": order.order_number,
            "user_id": order.user_id,
            "total": str(order.total_amount),
        },
    )
    send_order_confirmation_email(order)


def checkout(
    *,
    user,
    items: list[dict],
    shipping_address: dict,
    billing_address: dict,
    payment_method: str,
    payment_details: Optional[dict] = None,
    notes: str = "",
    using: str = DEFAULT_DB_ALIAS,
) -> Order:
    """Create an order from caller-priced line items.

    Each item is ``{"product_id", "quantity", "price", "variant_details"?}``.
    Validation failures (empty list, bad quantity, unknown or inactive
    product, short stock) raise before any write. Inside the transaction the
    product rows are locked and stock is re-checked; a shortfall found there
    raises InsufficientStock and rolls back. Any database error while
    writing rolls back everything and raises CheckoutFailed.

    The user's cart is emptied in the same transaction. The confirmation
    email is sent after commit.
    """

    _validate_items(items, using=using)
    totals = compute_totals(items)
    demand = _demand(items)

    try:
        with transaction.atomic(using=using):
            locked = Product.objects.using(using).select_for_update().in_bulk(list(demand))
            for product_id, needed in demand.items():
                product = locked.get(product_id)
                if product is None or not product.is_active:
                    raise NotFound(f"Product {product_id} not found")
                if product.stock_quantity < needed:
                    raise InsufficientStock(f"Insufficient stock for {product.name}")

            order = Order.objects.using(using).create(
                user=user,
                email=user.email or "",
                order_number=generate_order_number(),
                status=Order.STATUS_PENDING,
                payment_status=PaymentStatus.PENDING,
                payment_method=payment_method,
                payment_intent_id=(payment_details or {}).get("payment_intent_id", ""),
                subtotal=totals["subtotal"],
                tax_amount=totals["tax"],
                shipping_amount=totals["shipping"],
                total_amount=totals["total"],
                shipping_address=shipping_address,
                billing_address=billing_address,
                notes=notes or "",
            )
            for line in items:
                _record_line(order=order, product=locked[line["product_id"]], line=line, using=using)

            CartItem.objects.using(using).filter(cart__user=user).delete()
            transaction.on_commit(lambda: _after_checkout(order), using=using)
    except DatabaseError as exc:
        logger.error(
            "checkout_failed",
            exc_info=exc,
            extra={"event": "checkout_failed", "user_id": user.id, "items": len(items)},
        )
        raise CheckoutFailed() from exc
    return order


def list_orders(*, user, status: Optional[str] = None) -> QuerySet[Order]:
    qs = Order.objects.filter(user=user).prefetch_related("items")
    if status:
        qs = qs.filter(status=status)
    return qs


def get_order(*, user, order_id: int) -> Order:
    order = Order.objects.filter(pk=order_id, user=user).prefetch_related("items").first()
    if order is None:
        raise NotFound("Order not found")
    return order


def _restore_stock(order: Order) -> list[str]:
    """Return line quantities to stock once per order; returns fields to save."""
    if order.stock_restored:
        return []
    for item in order.items.all():
        if item.product_id is not None:
            Product.objects.filter(pk=item.product_id).update(stock_quantity=F("stock_quantity") + item.quantity)
    order.stock_restored = True
    return ["stock_restored"]


def _log_status_change(order: Order, previous: str) -> None:
    logger.info(
        "order_status_changed",
        extra={
            "event": "order_status_changed",
            "order_id": order.id,
            "user_id": order.user_id,
            "status_from": previous,
            "status_to": order.status,
        },
    )


@transaction.atomic
def cancel_order(*, user, order_id: int) -> Order:
    """Cancel the user's order and put its quantities back in stock."""

    order = Order.objects.select_for_update().filter(pk=order_id, user=user).first()
    if order is None:
        raise NotFound("Order not found")
    if order.status == Order.STATUS_CANCELLED:
        raise ValidationFailed("Order is already cancelled")
    if order.status == Order.STATUS_DELIVERED:
        raise ValidationFailed("Cannot cancel delivered order")

    previous = order.status
    fields = ["status", "updated_at", *_restore_stock(order)]
    order.status = Order.STATUS_CANCELLED
    order.save(update_fields=fields)
    _log_status_change(order, previous)
    transaction.on_commit(lambda: send_order_status_email(order))
    return order


@transaction.atomic
def update_order_status(
    *, order: Order, status: str, tracking_number: Optional[str] = None, notes: Optional[str] = None
) -> Order:
    """Admin status change. Moving to cancelled restores stock once.

    Once an order's stock has been returned it may only be cancelled or
    refunded; it cannot be reopened.
    """

    if status not in OrderStatus.values:
        raise ValidationFailed(f"Invalid status. Must be one of: {', '.join(OrderStatus.values)}")

    order = Order.objects.select_for_update().get(pk=order.pk)
    previous = order.status
    if order.stock_restored and status not in (Order.STATUS_CANCELLED, Order.STATUS_REFUNDED):
        raise ValidationFailed("Cancelled orders cannot be reopened", code="invalid_status_transition")

    fields = ["status", "updated_at"]
    if status == Order.STATUS_CANCELLED:
        fields += _restore_stock(order)
    order.status = status
    if tracking_number is not None:
        order.tracking_number = tracking_number
        fields.append("tracking_number")
    if notes is not None:
        order.notes = notes
        fields.append("notes")
    order.save(update_fields=fields)
    _log_status_change(order, previous)
    transaction.on_commit(lambda: send_order_status_email(order))
    return order


def attach_payment_intent(*, user, order_id: int, payment_intent_id: str) -> Order:
    order = get_order(user=user, order_id=order_id)
    order.payment_intent_id = payment_intent_id
    order.save(update_fields=["payment_intent_id", "updated_at"])
    return order


@transaction.atomic
def record_payment_outcome(*, payment_intent_id: str, payment_status: str) -> int:
    """Apply a gateway-reported payment status to orders carrying the intent.

    A refund also moves the order to ``refunded``. Returns the number of
    orders updated.
    """

    if not payment_intent_id:
        return 0
    orders = list(Order.objects.select_for_update().filter(payment_intent_id=payment_intent_id))
    for order in orders:
        order.payment_status = payment_status
        fields = ["payment_status", "updated_at"]
        if payment_status == PaymentStatus.REFUNDED and order.status != Order.STATUS_REFUNDED:
            previous = order.status
            order.status = Order.STATUS_REFUNDED
            fields.append("status")
            _log_status_change(order, previous)
        order.save(update_fields=fields)
    if orders:
        logger.info(
            "payment_status_recorded",
            extra={
                "event": "payment_status_recorded",
                "payment_intent_id": payment_intent_id,
                "payment_status": payment_status,
                "orders": len(orders),
            },
        )
    return len(orders)
