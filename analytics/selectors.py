"""Read-only aggregates for the admin dashboard and sales analytics.

Nothing here writes. Revenue counts orders that are processing, shipped or
delivered; cancelled orders never contribute to sales figures.
"""

from datetime import timedelta
from decimal import Decimal

from catalog.models import Product
from common.choices import AnalyticsPeriod, OrderStatus
from common.exceptions import ValidationFailed
from django.contrib.auth import get_user_model
from django.db.models import Avg, Count, F, Sum
from django.db.models.functions import TruncDate, TruncMonth
from django.utils import timezone
from orders.models import Order, OrderItem

REVENUE_STATUSES = [OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.DELIVERED]

PERIOD_DELTAS = {
    AnalyticsPeriod.LAST_24_HOURS: timedelta(hours=24),
    AnalyticsPeriod.LAST_7_DAYS: timedelta(days=7),
    AnalyticsPeriod.LAST_30_DAYS: timedelta(days=30),
    AnalyticsPeriod.LAST_90_DAYS: timedelta(days=90),
    AnalyticsPeriod.LAST_YEAR: timedelta(days=365),
}


def _money(value) -> str:
    return str((value or Decimal("0")).quantize(Decimal("0.01")))


def dashboard_stats() -> dict:
    User = get_user_model()
    revenue = Order.objects.filter(status__in=REVENUE_STATUSES).aggregate(total=Sum("total_amount"))["total"]
    recent = Order.objects.select_related("user").order_by("-created_at", "-id")[:5]
    low_stock = (
        Product.objects.filter(is_active=True, stock_quantity__lte=F("low_stock_threshold"))
        .order_by("stock_quantity", "id")
        .values("id", "name", "sku", "stock_quantity", "low_stock_threshold")[:5]
    )
    return {
        "total_products": Product.objects.count(),
        "total_orders": Order.objects.count(),
        "total_users": User.objects.filter(is_staff=False).count(),
        "total_revenue": _money(revenue),
        "recent_orders": [
            {
                "id": order.id,
                "order_number": order.order_number,
                "status": order.status,
                "total_amount": _money(order.total_amount),
                "customer_email": order.email or order.user.email,
                "created_at": order.created_at,
            }
            for order in recent
        ],
        "low_stock_products": list(low_stock),
    }


def sales_analytics(period: str = AnalyticsPeriod.LAST_30_DAYS) -> dict:
    """Sales by day (by month for ``1y``), top products, categories and statuses."""

    if period not in PERIOD_DELTAS:
        raise ValidationFailed(f"Invalid period. Must be one of: {', '.join(AnalyticsPeriod.values)}")

    now = timezone.now()
    since = now - PERIOD_DELTAS[period]
    orders = Order.objects.filter(created_at__gte=since).exclude(status=OrderStatus.CANCELLED)
    trunc = TruncMonth("created_at") if period == AnalyticsPeriod.LAST_YEAR else TruncDate("created_at")

    sales = (
        orders.annotate(bucket=trunc)
        .values("bucket")
        .annotate(orders=Count("id"), revenue=Sum("total_amount"), average_order_value=Avg("total_amount"))
        .order_by("bucket")
    )

    lines = OrderItem.objects.filter(order__in=orders)
    top_products = (
        lines.filter(product__isnull=False)
        .values("product_id", "product_name")
        .annotate(quantity_sold=Sum("quantity"), revenue=Sum("total_price"))
        .order_by("-quantity_sold", "product_id")[:10]
    )
    categories = (
        lines.filter(product__category__isnull=False)
        .values(category_name=F("product__category__name"))
        .annotate(quantity_sold=Sum("quantity"), revenue=Sum("total_price"), orders=Count("order", distinct=True))
        .order_by("-revenue")
    )
    statuses = (
        Order.objects.filter(created_at__gte=now - timedelta(days=30))
        .values("status")
        .annotate(count=Count("id"))
        .order_by("status")
    )

    return {
        "period": period,
        "sales": [
            {
                "date": row["bucket"].isoformat() if row["bucket"] else None,
                "orders": row["orders"],
                "revenue": _money(row["revenue"]),
                "average_order_value": _money(row["average_order_value"]),
            }
            for row in sales
        ],
        "top_products": [
            {
                "product_id": row["product_id"],
                "name": row["product_name"],
                "quantity_sold": row["quantity_sold"],
                "revenue": _money(row["revenue"]),
            }
            for row in top_products
        ],
        "category_performance": [
            {
                "category": row["category_name"],
                "quantity_sold": row["quantity_sold"],
                "orders": row["orders"],
                "revenue": _money(row["revenue"]),
            }
            for row in categories
        ],
        "order_status_breakdown": {row["status"]: row["count"] for row in statuses},
    }
