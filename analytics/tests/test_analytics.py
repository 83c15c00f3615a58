from datetime import timedelta
from decimal import Decimal

import pytest
from catalog.tests.factories import AdminFactory, CategoryFactory, ProductFactory, UserFactory
from django.utils import timezone
from orders.models import Order
from orders.tests.factories import OrderFactory, OrderItemFactory
from rest_framework.test import APIClient


@pytest.fixture
def admin_client():
    client = APIClient()
    client.force_authenticate(AdminFactory())
    return client


@pytest.mark.django_db
def test_reporting_requires_admin():
    client = APIClient()
    client.force_authenticate(UserFactory())
    assert client.get("/api/v1/admin/dashboard/").status_code == 403
    assert client.get("/api/v1/admin/analytics/").status_code == 403


@pytest.mark.django_db
def test_dashboard_totals(admin_client):
    ProductFactory(stock_quantity=50)
    low = ProductFactory(stock_quantity=2, low_stock_threshold=5)
    OrderFactory(status=Order.STATUS_DELIVERED, total_amount=Decimal("100.00"))
    OrderFactory(status=Order.STATUS_PROCESSING, total_amount=Decimal("50.50"))
    OrderFactory(status=Order.STATUS_PENDING, total_amount=Decimal("999.00"))
    OrderFactory(status=Order.STATUS_CANCELLED, total_amount=Decimal("999.00"))

    resp = admin_client.get("/api/v1/admin/dashboard/")
    assert resp.status_code == 200
    data = resp.data
    assert data["total_products"] >= 2
    assert data["total_orders"] == 4
    assert data["total_revenue"] == "150.50"
    # Admin excluded; four order owners counted
    assert data["total_users"] == 4
    assert len(data["recent_orders"]) == 4
    assert [p["id"] for p in data["low_stock_products"]][0] == low.id


@pytest.mark.django_db
def test_sales_analytics_excludes_cancelled(admin_client):
    rings = CategoryFactory(name="Rings", slug="rings")
    ring = ProductFactory(category=rings)
    kept = OrderItemFactory(
        product=ring, quantity=2, unit_price=Decimal("50.00"), order__total_amount=Decimal("108.00")
    )
    OrderItemFactory(
        product=ring,
        quantity=5,
        order__status=Order.STATUS_CANCELLED,
        order__total_amount=Decimal("540.00"),
    )
    old = OrderFactory(total_amount=Decimal("10.00"))
    Order.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=60))

    resp = admin_client.get("/api/v1/admin/analytics/?period=30d")
    assert resp.status_code == 200
    data = resp.data
    assert data["period"] == "30d"
    assert sum(row["orders"] for row in data["sales"]) == 1
    assert data["sales"][0]["revenue"] == "108.00"
    assert data["top_products"] == [
        {"product_id": ring.id, "name": kept.product_name, "quantity_sold": 2, "revenue": "100.00"}
    ]
    assert data["category_performance"][0]["category"] == "Rings"
    assert data["order_status_breakdown"] == {"pending": 1, "cancelled": 1}


@pytest.mark.django_db
def test_yearly_period_groups_by_month_and_rejects_unknown(admin_client):
    OrderFactory()
    resp = admin_client.get("/api/v1/admin/analytics/?period=1y")
    assert resp.status_code == 200
    assert len(resp.data["sales"]) == 1

    bad = admin_client.get("/api/v1/admin/analytics/?period=2w")
    assert bad.status_code == 400
    assert bad.data["code"] == "validation_error"
