import pytest
from catalog.tests.factories import ProductFactory, UserFactory
from common.exceptions import AlreadyExists, NotFound
from django.core.management import call_command
from django.db import IntegrityError
from rest_framework.test import APIClient
from wishlist.models import WishlistItem
from wishlist.services import add_to_wishlist, list_wishlist, remove_by_entry_id, remove_by_product_id
from wishlist.tests.factories import WishlistItemFactory


@pytest.mark.django_db
def test_duplicate_add_is_conflict_without_second_row():
    user = UserFactory()
    product = ProductFactory()
    add_to_wishlist(user=user, product_id=product.id)
    with pytest.raises(AlreadyExists):
        add_to_wishlist(user=user, product_id=product.id)
    assert WishlistItem.objects.filter(user=user, product=product).count() == 1


@pytest.mark.django_db
def test_concurrent_duplicate_insert_is_conflict(monkeypatch):
    product = ProductFactory()

    def racing_create(**kwargs):
        raise IntegrityError("UNIQUE constraint failed: wishlist_wishlistitem.user_id, product_id")

    monkeypatch.setattr(WishlistItem.objects, "create", racing_create)
    with pytest.raises(AlreadyExists) as excinfo:
        add_to_wishlist(user=UserFactory(), product_id=product.id)
    assert isinstance(excinfo.value.__cause__, IntegrityError)


@pytest.mark.django_db
def test_add_inactive_product_is_not_found():
    with pytest.raises(NotFound):
        add_to_wishlist(user=UserFactory(), product_id=ProductFactory(is_active=False).id)


@pytest.mark.django_db
def test_list_prunes_deactivated_products():
    entry = WishlistItemFactory()
    stale = WishlistItemFactory(user=entry.user)
    stale.product.is_active = False
    stale.product.save()

    assert list(list_wishlist(user=entry.user)) == [entry]
    assert not WishlistItem.objects.filter(pk=stale.pk).exists()


@pytest.mark.django_db
def test_remove_by_entry_and_by_product():
    entry = WishlistItemFactory()
    other = WishlistItemFactory(user=entry.user)
    user = entry.user

    remove_by_entry_id(user=user, entry_id=entry.id)
    with pytest.raises(NotFound):
        remove_by_entry_id(user=user, entry_id=entry.id)

    remove_by_product_id(user=user, product_id=other.product_id)
    with pytest.raises(NotFound):
        remove_by_product_id(user=user, product_id=other.product_id)


@pytest.mark.django_db
def test_wishlist_api_flow():
    user = UserFactory()
    product = ProductFactory()
    client = APIClient()
    client.force_authenticate(user)

    resp = client.post("/api/v1/wishlist/", {"product_id": product.id}, format="json")
    assert resp.status_code == 201
    entry_id = resp.data["id"]

    dup = client.post("/api/v1/wishlist/", {"product_id": product.id}, format="json")
    assert dup.status_code == 400
    assert dup.data == {"detail": "Product already in wishlist", "code": "already_exists"}

    assert client.get(f"/api/v1/wishlist/check/{product.id}/").data == {"in_wishlist": True}
    listing = client.get("/api/v1/wishlist/")
    assert listing.data["count"] == 1
    assert listing.data["items"][0]["product"]["id"] == product.id

    assert client.delete(f"/api/v1/wishlist/items/{entry_id}/").status_code == 200
    assert client.delete(f"/api/v1/wishlist/products/{product.id}/").status_code == 404
    assert client.delete("/api/v1/wishlist/").data["removed_items"] == 0


@pytest.mark.django_db
def test_cleanup_command():
    WishlistItemFactory(product=ProductFactory(is_active=False))
    WishlistItemFactory()
    call_command("cleanup_wishlists")
    assert WishlistItem.objects.count() == 1
