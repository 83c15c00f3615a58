import pytest
from cart.models import CartItem
from catalog.tests.factories import ProductFactory, UserFactory
from rest_framework.test import APIClient


@pytest.fixture
def user():
    return UserFactory()


@pytest.fixture
def client(user):
    api = APIClient()
    api.force_authenticate(user)
    return api


@pytest.mark.django_db
def test_requires_authentication():
    resp = APIClient().get("/api/v1/cart/")
    assert resp.status_code == 401
    assert resp.data == {"detail": "Access token required", "code": "token_missing"}


@pytest.mark.django_db
def test_add_get_update_remove_flow(client):
    product = ProductFactory(name="Gold Hoops", stock_quantity=5)

    resp = client.post("/api/v1/cart/add/", {"product_id": product.id, "quantity": 2}, format="json")
    assert resp.status_code == 201
    assert resp.data["product_name"] == "Gold Hoops"
    assert resp.data["quantity"] == 2
    assert resp.data["price"] == "100.00"
    item_id = resp.data["cart_item_id"]

    cart = client.get("/api/v1/cart/")
    assert cart.status_code == 200
    assert cart.data["item_count"] == 2
    assert cart.data["items"][0]["product_id"] == product.id
    assert cart.data["subtotal"] == "200.00"

    assert client.get("/api/v1/cart/count/").data == {"count": 2}

    resp = client.patch(f"/api/v1/cart/items/{item_id}/", {"quantity": 4}, format="json")
    assert resp.status_code == 200
    assert resp.data["quantity"] == 4

    assert client.delete(f"/api/v1/cart/items/{item_id}/").status_code == 200
    again = client.delete(f"/api/v1/cart/items/{item_id}/")
    assert again.status_code == 404
    assert again.data["code"] == "not_found"


@pytest.mark.django_db
def test_add_errors_map_to_400_and_404(client):
    product = ProductFactory(stock_quantity=1)

    short = client.post("/api/v1/cart/add/", {"product_id": product.id, "quantity": 2}, format="json")
    assert short.status_code == 400
    assert short.data["code"] == "insufficient_stock"

    zero = client.post("/api/v1/cart/add/", {"product_id": product.id, "quantity": 0}, format="json")
    assert zero.status_code == 400
    assert zero.data["code"] == "invalid_quantity"

    missing = client.post("/api/v1/cart/add/", {"product_id": 987654, "quantity": 1}, format="json")
    assert missing.status_code == 404


@pytest.mark.django_db
def test_clear_and_merge(client, user):
    a = ProductFactory(stock_quantity=2)
    b = ProductFactory(is_active=False)

    resp = client.post(
        "/api/v1/cart/merge/",
        {"items": [{"product_id": a.id, "quantity": 9}, {"product_id": b.id, "quantity": 1}]},
        format="json",
    )
    assert resp.status_code == 200
    assert resp.data == {"merged_items": 1, "skipped_items": 1}

    resp = client.delete("/api/v1/cart/clear/")
    assert resp.data["removed_items"] == 1
    assert not CartItem.objects.filter(cart__user=user).exists()
