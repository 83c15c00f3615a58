from decimal import Decimal

from common.money import shipping_flat, tax_on, to_money


def test_to_money_rounds_half_up():
    assert to_money("2.345") == Decimal("2.35")
    assert to_money(Decimal("2.344")) == Decimal("2.34")
    assert to_money(10) == Decimal("10.00")


def test_tax_uses_configured_rate(settings):
    settings.ORDER_TAX_RATE = Decimal("0.08")
    assert tax_on(Decimal("200.00")) == Decimal("16.00")
    assert tax_on(Decimal("0.06")) == Decimal("0.00")


def test_shipping_flat_is_configurable(settings):
    settings.ORDER_SHIPPING_FLAT = Decimal("9.5")
    assert shipping_flat() == Decimal("9.50")
