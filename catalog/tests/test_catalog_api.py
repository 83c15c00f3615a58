from decimal import Decimal

import pytest
from catalog.tests.factories import CategoryFactory, ProductFactory, ReviewFactory, UserFactory
from rest_framework.test import APIClient


@pytest.mark.django_db
def test_product_list_envelope_filters_and_sort():
    rings = CategoryFactory(name="Rings", slug="rings")
    watches = CategoryFactory(name="Watches", slug="watches")
    cheap = ProductFactory(name="Silver Band", category=rings, price=Decimal("50.00"))
    pricey = ProductFactory(name="Diamond Ring", category=rings, price=Decimal("900.00"))
    ProductFactory(name="Chronograph", category=watches, price=Decimal("1500.00"))
    ProductFactory(name="Retired Ring", category=rings, is_active=False)

    client = APIClient()
    resp = client.get("/api/v1/products/?category=rings&sort=price&order=asc")
    assert resp.status_code == 200
    assert [p["id"] for p in resp.data["products"]] == [cheap.id, pricey.id]
    assert resp.data["pagination"]["total_items"] == 2
    assert resp.data["pagination"]["has_next_page"] is False
    first = resp.data["products"][0]
    assert first["category"]["slug"] == "rings"
    assert first["primary_image"] == "https://img.example.com/a.jpg"
    assert first["review_count"] == 0

    resp = client.get("/api/v1/products/?minPrice=100&maxPrice=1000")
    assert [p["id"] for p in resp.data["products"]] == [pricey.id]


@pytest.mark.django_db
def test_product_list_search_and_pagination():
    ProductFactory(name="Emerald Pendant", tags=["green"])
    ProductFactory(name="Ruby Pendant")
    ProductFactory(name="Tennis Bracelet", short_description="Classic green sapphire line")

    client = APIClient()
    resp = client.get("/api/v1/products/?search=pendant")
    assert {p["name"] for p in resp.data["products"]} == {"Emerald Pendant", "Ruby Pendant"}

    resp = client.get("/api/v1/products/?search=green")
    assert {p["name"] for p in resp.data["products"]} == {"Emerald Pendant", "Tennis Bracelet"}

    resp = client.get("/api/v1/products/?limit=2&page=2")
    assert resp.status_code == 200
    assert len(resp.data["products"]) == 1
    assert resp.data["pagination"]["current_page"] == 2
    assert resp.data["pagination"]["has_prev_page"] is True


@pytest.mark.django_db
def test_sort_by_rating():
    low = ProductFactory()
    high = ProductFactory()
    ReviewFactory(product=low, rating=2)
    ReviewFactory(product=high, rating=5)

    resp = APIClient().get("/api/v1/products/?sort=rating&order=desc")
    ids = [p["id"] for p in resp.data["products"]]
    assert ids.index(high.id) < ids.index(low.id)
    assert resp.data["products"][0]["average_rating"] == 5.0


@pytest.mark.django_db
def test_featured_and_categories():
    ProductFactory(is_featured=True)
    ProductFactory(is_featured=False)
    CategoryFactory(name="Hidden", slug="hidden", is_active=False)

    client = APIClient()
    resp = client.get("/api/v1/products/featured/")
    assert resp.status_code == 200
    assert len(resp.data["products"]) == 1

    resp = client.get("/api/v1/products/categories/")
    assert "hidden" not in [c["slug"] for c in resp.data["categories"]]


@pytest.mark.django_db
def test_detail_by_id_or_slug_with_related_products():
    product = ProductFactory(
        name="Sapphire Ring", slug="sapphire-ring", tags=["blue"], specifications={"metal": "platinum"}
    )
    for _ in range(5):
        ProductFactory(category=product.category)

    client = APIClient()
    by_slug = client.get("/api/v1/products/sapphire-ring/")
    by_id = client.get(f"/api/v1/products/{product.id}/")
    assert by_slug.status_code == by_id.status_code == 200
    assert by_slug.data["id"] == by_id.data["id"] == product.id
    assert by_slug.data["tags"] == ["blue"]
    assert by_slug.data["specifications"] == {"metal": "platinum"}
    assert len(by_slug.data["related_products"]) == 4
    assert product.id not in [p["id"] for p in by_slug.data["related_products"]]


@pytest.mark.django_db
def test_detail_missing_or_inactive_is_404():
    inactive = ProductFactory(is_active=False)
    client = APIClient()
    assert client.get("/api/v1/products/does-not-exist/").status_code == 404
    resp = client.get(f"/api/v1/products/{inactive.id}/")
    assert resp.status_code == 404
    assert resp.data == {"detail": "Product not found", "code": "not_found"}


@pytest.mark.django_db
def test_non_ascii_digits_are_treated_as_slugs():
    client = APIClient()
    assert client.get("/api/v1/products/%C2%B2/").status_code == 404

    squared = ProductFactory(slug="\u00b2")
    resp = client.get("/api/v1/products/%C2%B2/")
    assert resp.status_code == 200
    assert resp.data["id"] == squared.id

    CategoryFactory(name="Rings", slug="rings")
    listing = client.get("/api/v1/products/?category=%C2%B2")
    assert listing.status_code == 200
    assert listing.data["products"] == []


@pytest.mark.django_db
def test_malformed_json_columns_fall_back_to_defaults():
    product = ProductFactory(images="not json", tags='{"a": 1}', specifications="[1, 2]")
    resp = APIClient().get(f"/api/v1/products/{product.id}/")
    assert resp.status_code == 200
    assert resp.data["images"] == []
    assert resp.data["primary_image"] is None
    assert resp.data["tags"] == []
    assert resp.data["specifications"] == {}


@pytest.mark.django_db
def test_reviews_list_and_single_review_per_user():
    product = ProductFactory()
    user = UserFactory()
    ReviewFactory(product=product, is_approved=False)

    client = APIClient()
    assert client.get(f"/api/v1/products/{product.id}/reviews/").data["reviews"] == []
    assert client.post(f"/api/v1/products/{product.id}/reviews/", {"rating": 4}, format="json").status_code == 401

    client.force_authenticate(user)
    resp = client.post(f"/api/v1/products/{product.id}/reviews/", {"rating": 4, "comment": "Lovely"}, format="json")
    assert resp.status_code == 201
    dup = client.post(f"/api/v1/products/{product.id}/reviews/", {"rating": 5}, format="json")
    assert dup.status_code == 400
    assert dup.data["code"] == "already_exists"

    bad = client.post(f"/api/v1/products/{product.id}/reviews/", {"rating": 9}, format="json")
    assert bad.status_code == 400
    assert bad.data["code"] == "validation_error"
    assert len(client.get(f"/api/v1/products/{product.id}/reviews/").data["reviews"]) == 1
