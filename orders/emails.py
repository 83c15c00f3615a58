"""Email utilities for the orders app.

Uses Django's email backend, with links composed from FRONTEND_URL.
"""

from django.conf import settings
from django.core.mail import send_mail


def _order_url(order) -> str:
    frontend = getattr(settings, "FRONTEND_URL", "")
    if not frontend:
        return ""
    return f"{frontend.rstrip('/')}/orders/{order.id}"


def _recipient(order):
    return order.email or getattr(order.user, "email", None)


def send_order_confirmation_email(order) -> None:
    """Send an order confirmation with the line summary and total.

    Silently no-ops if no email is present.
    """
    to_email = _recipient(order)
    if not to_email:
        return

    lines = "\n".join(
        f"  {item.quantity} x {item.product_name} @ {item.unit_price} = {item.total_price}"
        for item in order.items.all()
    )
    body = (
        "Thank you for your order!\n\n"
        f"Order: {order.order_number}\n"
        f"{lines}\n\n"
        f"Subtotal: {order.subtotal}\n"
        f"Tax: {order.tax_amount}\n"
        f"Shipping: {order.shipping_amount}\n"
        f"Total: {order.total_amount}\n\n"
        f"You can view your order here: {_order_url(order)}\n"
    )
    send_mail(
        f"Your order {order.order_number} has been received",
        body,
        getattr(settings, "DEFAULT_FROM_EMAIL", None),
        [to_email],
        fail_silently=True,
    )


def send_order_status_email(order) -> None:
    to_email = _recipient(order)
    if not to_email:
        return

    body = f"Order: {order.order_number}\nStatus: {order.get_status_display()}\n"
    if order.tracking_number:
        body += f"Tracking number: {order.tracking_number}\n"
    body += f"\nYou can view your order here: {_order_url(order)}\n"
    send_mail(
        f"Order {order.order_number} is now {order.get_status_display().lower()}",
        body,
        getattr(settings, "DEFAULT_FROM_EMAIL", None),
        [to_email],
        fail_silently=True,
    )
