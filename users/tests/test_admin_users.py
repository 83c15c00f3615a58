import pytest
from catalog.tests.factories import AdminFactory, UserFactory
from django.contrib.auth import get_user_model
from orders.tests.factories import OrderFactory
from rest_framework.test import APIClient


@pytest.fixture
def admin():
    return AdminFactory(email="boss@example.com", first_name="Boss", last_name="Admin")


@pytest.fixture
def admin_client(admin):
    client = APIClient()
    client.force_authenticate(admin)
    return client


@pytest.mark.django_db
def test_admin_users_forbidden_for_customers():
    client = APIClient()
    client.force_authenticate(UserFactory())
    resp = client.get("/api/v1/admin/users/")
    assert resp.status_code == 403
    assert resp.data["code"] == "permission_denied"
    assert resp.data["detail"] == "Admin access required"
    assert APIClient().get("/api/v1/admin/users/").status_code == 401


@pytest.mark.django_db
def test_list_search_and_role_filter(admin_client, admin):
    alice = UserFactory(first_name="Alice", last_name="Martin")
    UserFactory(first_name="Bob", last_name="Stone")

    resp = admin_client.get("/api/v1/admin/users/?search=alice")
    assert resp.status_code == 200
    assert [u["id"] for u in resp.data["users"]] == [alice.id]

    admins = admin_client.get("/api/v1/admin/users/?role=admin")
    assert [u["id"] for u in admins.data["users"]] == [admin.id]
    customers = admin_client.get("/api/v1/admin/users/?role=customer")
    assert customers.data["pagination"]["total_items"] == 2


@pytest.mark.django_db
def test_update_is_allow_listed(admin_client):
    user = UserFactory()
    resp = admin_client.patch(
        f"/api/v1/admin/users/{user.id}/",
        {"is_admin": True, "first_name": "Promoted", "password": "hijack", "is_superuser": True},
        format="json",
    )
    assert resp.status_code == 200
    assert resp.data["is_admin"] is True
    user.refresh_from_db()
    assert user.is_staff and not user.is_superuser
    assert user.check_password("pass12345")


@pytest.mark.django_db
def test_delete_rules(admin_client, admin):
    self_delete = admin_client.delete(f"/api/v1/admin/users/{admin.id}/")
    assert self_delete.status_code == 400
    assert self_delete.data["code"] == "cannot_delete_self"

    buyer = OrderFactory().user
    assert admin_client.delete(f"/api/v1/admin/users/{buyer.id}/").status_code == 400

    idle = UserFactory()
    assert admin_client.delete(f"/api/v1/admin/users/{idle.id}/").status_code == 204
    assert not get_user_model().objects.filter(pk=idle.id).exists()
    assert admin_client.get(f"/api/v1/admin/users/{idle.id}/").status_code == 404


@pytest.mark.django_db
def test_admin_creates_accounts_without_a_default_password(admin_client):
    resp = admin_client.post(
        "/api/v1/admin/users/",
        {
            "first_name": "Grace",
            "last_name": "Hopper",
            "email": "Grace@Example.com",
            "phone": "+15550001111",
            "is_admin": True,
            "is_verified": True,
            "is_superuser": True,
        },
        format="json",
    )
    assert resp.status_code == 201
    assert resp.data["email"] == "grace@example.com"
    assert resp.data["is_admin"] is True
    created = get_user_model().objects.get(pk=resp.data["id"])
    assert created.is_verified and not created.is_superuser
    assert not created.has_usable_password()

    with_password = admin_client.post(
        "/api/v1/admin/users/",
        {"first_name": "Ada", "last_name": "Byron", "email": "ada@example.com", "password": "Analytical-Engine-1843"},
        format="json",
    )
    assert with_password.status_code == 201
    assert get_user_model().objects.get(email="ada@example.com").check_password("Analytical-Engine-1843")

    duplicate = admin_client.post(
        "/api/v1/admin/users/",
        {"first_name": "G", "last_name": "H", "email": "grace@example.com"},
        format="json",
    )
    assert duplicate.status_code == 400
    assert "email" in duplicate.data["errors"]

    missing = admin_client.post("/api/v1/admin/users/", {"email": "x@example.com"}, format="json")
    assert missing.status_code == 400
    assert {"first_name", "last_name"} <= set(missing.data["errors"])
