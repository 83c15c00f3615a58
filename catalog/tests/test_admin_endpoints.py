from decimal import Decimal

import pytest
from catalog.models import Category, Product
from catalog.tests.factories import AdminFactory, CategoryFactory, ProductFactory, UserFactory
from django.core.management import call_command
from rest_framework.test import APIClient


@pytest.fixture
def admin_client():
    client = APIClient()
    client.force_authenticate(AdminFactory())
    return client


@pytest.mark.django_db
def test_non_admin_is_forbidden():
    client = APIClient()
    assert client.get("/api/v1/admin/products/").status_code == 401
    client.force_authenticate(UserFactory())
    resp = client.post("/api/v1/admin/products/", {"name": "X", "price": "1.00"}, format="json")
    assert resp.status_code == 403


@pytest.mark.django_db
def test_create_product_derives_slug_and_validates_json_fields(admin_client):
    cat = CategoryFactory()
    payload = {
        "name": "Rose Gold Bangle",
        "price": "420.00",
        "stock_quantity": 3,
        "category": cat.id,
        "images": ["https://img.example.com/bangle.jpg"],
        "specifications": {"metal": "rose gold"},
    }
    resp = admin_client.post("/api/v1/admin/products/", payload, format="json")
    assert resp.status_code == 201, resp.data
    assert resp.data["slug"] == "rose-gold-bangle"

    again = admin_client.post("/api/v1/admin/products/", payload, format="json")
    assert again.data["slug"] == "rose-gold-bangle-2"

    bad = admin_client.post("/api/v1/admin/products/", {**payload, "tags": [{"x": 1}]}, format="json")
    assert bad.status_code == 400
    assert "tags" in bad.data["errors"]


@pytest.mark.django_db
def test_update_ignores_unknown_keys(admin_client):
    product = ProductFactory(price=Decimal("10.00"))
    resp = admin_client.patch(
        f"/api/v1/admin/products/{product.id}/",
        {"price": "12.50", "created_at": "2000-01-01T00:00:00Z", "bogus": "x"},
        format="json",
    )
    assert resp.status_code == 200
    product.refresh_from_db()
    assert product.price == Decimal("12.50")
    assert product.created_at.year != 2000


@pytest.mark.django_db
def test_delete_is_soft_and_stock_update(admin_client):
    product = ProductFactory(stock_quantity=1)
    resp = admin_client.patch(f"/api/v1/admin/products/{product.id}/stock/", {"stock_quantity": 7}, format="json")
    assert resp.status_code == 200
    assert resp.data["stock_quantity"] == 7

    neg = admin_client.patch(f"/api/v1/admin/products/{product.id}/stock/", {"stock_quantity": -1}, format="json")
    assert neg.status_code == 400

    assert admin_client.delete(f"/api/v1/admin/products/{product.id}/").status_code == 200
    assert Product.objects.filter(pk=product.id, is_active=False).exists()


@pytest.mark.django_db
def test_category_crud(admin_client):
    resp = admin_client.post("/api/v1/admin/categories/", {"name": "Brooches"}, format="json")
    assert resp.status_code == 201
    assert resp.data["slug"] == "brooches"
    cat_id = resp.data["id"]
    resp = admin_client.patch(f"/api/v1/admin/categories/{cat_id}/", {"sort_order": 3}, format="json")
    assert resp.status_code == 200
    assert admin_client.delete(f"/api/v1/admin/categories/{cat_id}/").status_code == 204
    assert not Category.objects.filter(pk=cat_id).exists()


@pytest.mark.django_db
def test_seed_catalog_is_idempotent():
    call_command("seed_catalog", "--demo")
    call_command("seed_catalog", "--demo")
    assert list(Category.objects.values_list("name", flat=True)) == [
        "Rings",
        "Necklaces",
        "Earrings",
        "Bracelets",
        "Watches",
    ]
    assert Product.objects.count() == 3
