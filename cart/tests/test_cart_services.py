from decimal import Decimal

import pytest
from cart.models import CartItem
from cart.selectors import cart_item_count, cart_summary
from cart.services import add_item, clear_cart, get_or_create_cart, merge_guest_cart, remove_item, update_item_quantity
from cart.tests.factories import CartItemFactory
from catalog.tests.factories import ProductFactory, UserFactory
from common.exceptions import InsufficientStock, InvalidQuantity, NotFound


@pytest.mark.django_db
def test_add_merges_same_product_and_variant():
    user = UserFactory()
    product = ProductFactory(stock_quantity=10)

    first = add_item(user=user, product_id=product.id, quantity=2)
    second = add_item(user=user, product_id=product.id, quantity=3)
    assert first.id == second.id
    assert second.quantity == 5

    sized = add_item(user=user, product_id=product.id, quantity=1, variant_details={"size": "6"})
    same_size = add_item(user=user, product_id=product.id, quantity=1, variant_details={"size": "6"})
    assert sized.id == same_size.id != first.id
    assert CartItem.objects.filter(cart__user=user).count() == 2


@pytest.mark.django_db
def test_add_over_stock_fails_and_cart_unchanged():
    user = UserFactory()
    product = ProductFactory(stock_quantity=5)
    add_item(user=user, product_id=product.id, quantity=3)

    with pytest.raises(InsufficientStock):
        add_item(user=user, product_id=product.id, quantity=3)
    assert CartItem.objects.get(cart__user=user).quantity == 3


@pytest.mark.django_db
def test_add_rejects_bad_quantity_and_inactive_product():
    user = UserFactory()
    with pytest.raises(InvalidQuantity):
        add_item(user=user, product_id=ProductFactory().id, quantity=0)
    with pytest.raises(NotFound):
        add_item(user=user, product_id=ProductFactory(is_active=False).id, quantity=1)
    with pytest.raises(NotFound):
        add_item(user=user, product_id=999999, quantity=1)


@pytest.mark.django_db
def test_update_quantity_checks_ownership_and_stock():
    item = CartItemFactory(product=ProductFactory(stock_quantity=4), quantity=1)
    owner = item.cart.user

    assert update_item_quantity(user=owner, item_id=item.id, quantity=4).quantity == 4
    with pytest.raises(InsufficientStock):
        update_item_quantity(user=owner, item_id=item.id, quantity=5)
    with pytest.raises(InvalidQuantity):
        update_item_quantity(user=owner, item_id=item.id, quantity=0)
    with pytest.raises(NotFound):
        update_item_quantity(user=UserFactory(), item_id=item.id, quantity=1)


@pytest.mark.django_db
def test_remove_twice_reports_not_found():
    item = CartItemFactory()
    other = CartItemFactory(cart=item.cart)
    user = item.cart.user

    remove_item(user=user, item_id=item.id)
    with pytest.raises(NotFound):
        remove_item(user=user, item_id=item.id)
    assert list(CartItem.objects.filter(cart__user=user)) == [other]


@pytest.mark.django_db
def test_clear_is_idempotent():
    item = CartItemFactory()
    CartItemFactory(cart=item.cart)
    user = item.cart.user
    assert clear_cart(user=user) == 2
    assert clear_cart(user=user) == 0


@pytest.mark.django_db
def test_merge_caps_at_stock_and_skips_inactive():
    user = UserFactory()
    limited = ProductFactory(stock_quantity=3)
    retired = ProductFactory(is_active=False)

    result = merge_guest_cart(
        user=user,
        guest_items=[
            {"product_id": limited.id, "quantity": 5},
            {"product_id": retired.id, "quantity": 1},
        ],
    )
    assert result == {"merged_items": 1, "skipped_items": 1}
    assert CartItem.objects.get(cart__user=user, product=limited).quantity == 3


@pytest.mark.django_db
def test_merge_skips_out_of_stock_missing_and_malformed():
    user = UserFactory()
    sold_out = ProductFactory(stock_quantity=0)
    result = merge_guest_cart(
        user=user,
        guest_items=[{"product_id": sold_out.id, "quantity": 1}, {"product_id": 424242}, {"quantity": 2}],
    )
    assert result == {"merged_items": 0, "skipped_items": 3}


@pytest.mark.django_db
def test_summary_totals_and_count(settings):
    settings.ORDER_TAX_RATE = Decimal("0.08")
    user = UserFactory()
    cart = get_or_create_cart(user)
    CartItemFactory(cart=cart, product=ProductFactory(price=Decimal("100.00")), quantity=2)
    CartItemFactory(cart=cart, product=ProductFactory(price=Decimal("49.50")), quantity=1)

    summary = cart_summary(cart)
    assert summary["item_count"] == 3
    assert summary["subtotal"] == Decimal("249.50")
    assert summary["estimated_tax"] == Decimal("19.96")
    assert summary["total"] == Decimal("269.46")
    assert cart_item_count(user) == 3


@pytest.mark.django_db
def test_summary_and_badge_count_stay_query_bounded(django_assert_num_queries):
    user = UserFactory()
    cart = get_or_create_cart(user)
    CartItemFactory.create_batch(3, cart=cart, quantity=2)

    with django_assert_num_queries(1):
        summary = cart_summary(cart)
    assert summary["item_count"] == 6

    with django_assert_num_queries(1):
        assert cart_item_count(user) == 6
