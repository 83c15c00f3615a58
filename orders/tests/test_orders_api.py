from decimal import Decimal

import pytest
from catalog.models import Product
from catalog.tests.factories import AdminFactory, ProductFactory, UserFactory
from orders.models import Order
from orders.services import checkout
from orders.tests.factories import OrderFactory, OrderItemFactory
from rest_framework.test import APIClient


def _client(user):
    client = APIClient()
    client.force_authenticate(user)
    return client


@pytest.mark.django_db
def test_checkout_endpoint_accepts_camel_case():
    user = UserFactory()
    a = ProductFactory(stock_quantity=3)
    b = ProductFactory(stock_quantity=3)
    payload = {
        "items": [
            {"productId": a.id, "quantity": 2, "price": "100.00"},
            {"product_id": b.id, "quantity": 1, "price": "49.50"},
        ],
        "shippingAddress": {"line1": "1 Main St"},
        "billingAddress": {"line1": "1 Main St"},
        "paymentMethod": "card",
    }
    resp = _client(user).post("/api/v1/orders/checkout/", payload, format="json")
    assert resp.status_code == 200, resp.data
    assert resp.data["total"] == "269.46"
    assert resp.data["orderNumber"].startswith("ORD-")
    assert len(resp.data["order"]["items"]) == 2
    assert resp.data["order"]["tax_amount"] == "19.96"


@pytest.mark.django_db
def test_checkout_endpoint_error_shapes():
    user = UserFactory()
    product = ProductFactory(stock_quantity=1)
    client = _client(user)
    base = {"shipping_address": {}, "billing_address": {}, "payment_method": "card"}

    empty = client.post("/api/v1/orders/checkout/", {**base, "items": []}, format="json")
    assert empty.status_code == 400
    assert empty.data["code"] == "validation_error"

    short = client.post(
        "/api/v1/orders/checkout/",
        {**base, "items": [{"product_id": product.id, "quantity": 5, "price": "1.00"}]},
        format="json",
    )
    assert short.status_code == 400
    assert short.data["code"] == "insufficient_stock"
    assert APIClient().post("/api/v1/orders/checkout/", base, format="json").status_code == 401


@pytest.mark.django_db
def test_list_and_detail_are_scoped_to_owner():
    user = UserFactory()
    mine = OrderFactory(user=user)
    OrderFactory(user=user, status=Order.STATUS_SHIPPED)
    theirs = OrderFactory()
    client = _client(user)

    resp = client.get("/api/v1/orders/")
    assert resp.status_code == 200
    assert resp.data["pagination"]["total_items"] == 2

    resp = client.get("/api/v1/orders/?status=shipped")
    assert [o["status"] for o in resp.data["orders"]] == ["shipped"]

    assert client.get(f"/api/v1/orders/{mine.id}/").status_code == 200
    assert client.get(f"/api/v1/orders/{theirs.id}/").status_code == 404


@pytest.mark.django_db
def test_cancel_restores_stock_and_rejects_repeats():
    user = UserFactory()
    product = ProductFactory(stock_quantity=2)
    item = OrderItemFactory(order__user=user, product=product, quantity=3)
    client = _client(user)

    resp = client.post(f"/api/v1/orders/{item.order_id}/cancel/")
    assert resp.status_code == 200
    assert resp.data["status"] == "cancelled"
    assert Product.objects.get(pk=product.id).stock_quantity == 5

    again = client.post(f"/api/v1/orders/{item.order_id}/cancel/")
    assert again.status_code == 400
    assert again.data["detail"] == "Order is already cancelled"

    delivered = OrderFactory(user=user, status=Order.STATUS_DELIVERED)
    resp = client.post(f"/api/v1/orders/{delivered.id}/cancel/")
    assert resp.status_code == 400
    assert resp.data["detail"] == "Cannot cancel delivered order"


@pytest.mark.django_db
def test_snapshot_survives_product_deletion():
    item = OrderItemFactory()
    item.product.delete()
    resp = _client(item.order.user).get(f"/api/v1/orders/{item.order_id}/")
    assert resp.status_code == 200
    line = resp.data["items"][0]
    assert line["product"] is None
    assert line["product_name"] == item.product_name


@pytest.mark.django_db
def test_admin_order_endpoints(django_capture_on_commit_callbacks, mailoutbox):
    order = OrderFactory(email="buyer@example.com")
    OrderFactory()
    user_client = _client(UserFactory())
    admin_client = _client(AdminFactory())

    assert user_client.get("/api/v1/admin/orders/").status_code == 403

    resp = admin_client.get("/api/v1/admin/orders/?search=buyer@")
    assert resp.status_code == 200
    assert [o["id"] for o in resp.data["orders"]] == [order.id]
    assert resp.data["orders"][0]["customer"]["id"] == order.user_id

    assert admin_client.get(f"/api/v1/admin/orders/{order.id}/").status_code == 200

    with django_capture_on_commit_callbacks(execute=True):
        resp = admin_client.patch(
            f"/api/v1/admin/orders/{order.id}/status/",
            {"status": "shipped", "tracking_number": "1Z999", "role": "ignored"},
            format="json",
        )
    assert resp.status_code == 200
    assert resp.data["status"] == "shipped"
    assert resp.data["tracking_number"] == "1Z999"
    assert len(mailoutbox) == 1

    bad = admin_client.patch(f"/api/v1/admin/orders/{order.id}/status/", {"status": "lost"}, format="json")
    assert bad.status_code == 400
    missing = admin_client.patch("/api/v1/admin/orders/999999/status/", {"status": "shipped"}, format="json")
    assert missing.status_code == 404


@pytest.mark.django_db
def test_admin_cancel_restores_stock_once():
    item = OrderItemFactory(product=ProductFactory(stock_quantity=0), quantity=2, unit_price=Decimal("5.00"))
    admin_client = _client(AdminFactory())
    url = f"/api/v1/admin/orders/{item.order_id}/status/"
    admin_client.patch(url, {"status": "cancelled"}, format="json")
    admin_client.patch(url, {"status": "cancelled"}, format="json")
    assert Product.objects.get(pk=item.product_id).stock_quantity == 2


@pytest.mark.django_db
def test_cancelled_order_cannot_be_reopened_or_restocked_twice():
    user = UserFactory()
    product = ProductFactory(stock_quantity=5, price=Decimal("10.00"))
    order = checkout(
        user=user,
        items=[{"product_id": product.id, "quantity": 2, "price": Decimal("10.00")}],
        shipping_address={"city": "Paris"},
        billing_address={"city": "Paris"},
        payment_method="card",
    )
    assert Product.objects.get(pk=product.id).stock_quantity == 3

    admin_client = _client(AdminFactory())
    url = f"/api/v1/admin/orders/{order.id}/status/"
    assert admin_client.patch(url, {"status": "cancelled"}, format="json").status_code == 200
    assert Product.objects.get(pk=product.id).stock_quantity == 5

    reopen = admin_client.patch(url, {"status": "processing"}, format="json")
    assert reopen.status_code == 400
    assert reopen.data["code"] == "invalid_status_transition"
    assert _client(user).post(f"/api/v1/orders/{order.id}/cancel/").status_code == 400

    assert admin_client.patch(url, {"status": "refunded"}, format="json").status_code == 200
    assert admin_client.patch(url, {"status": "cancelled"}, format="json").status_code == 200
    assert admin_client.patch(url, {"status": "shipped"}, format="json").status_code == 400

    order.refresh_from_db()
    assert order.status == Order.STATUS_CANCELLED
    assert order.stock_restored is True
    assert Product.objects.get(pk=product.id).stock_quantity == 5
