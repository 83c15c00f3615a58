"""DRF serializers for Orders.

Checkout input accepts the camelCase keys the storefront sends
(`shippingAddress`, `paymentMethod`, ...) as well as snake_case.
"""

from common.choices import OrderStatus
from common.json_fields import StringMapField
from rest_framework import serializers

from .models import Order, OrderItem

CHECKOUT_ALIASES = {
    "shippingAddress": "shipping_address",
    "billingAddress": "billing_address",
    "paymentMethod": "payment_method",
    "paymentDetails": "payment_details",
    "productId": "product_id",
    "variantDetails": "variant_details",
}


class AliasedKeysMixin:
    def to_internal_value(self, data):
        if hasattr(data, "items"):
            data = {CHECKOUT_ALIASES.get(key, key): value for key, value in data.items()}
        return super().to_internal_value(data)


class OrderItemSerializer(serializers.ModelSerializer):
    variant_details = StringMapField(read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product",
            "product_name",
            "product_sku",
            "unit_price",
            "quantity",
            "total_price",
            "variant_details",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "status",
            "payment_status",
            "payment_method",
            "subtotal",
            "tax_amount",
            "shipping_amount",
            "total_amount",
            "shipping_address",
            "billing_address",
            "notes",
            "tracking_number",
            "email",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AdminOrderSerializer(OrderSerializer):
    customer = serializers.SerializerMethodField()

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ["customer", "payment_intent_id"]
        read_only_fields = fields

    def get_customer(self, obj) -> dict:
        user = obj.user
        return {"id": user.id, "email": user.email, "first_name": user.first_name, "last_name": user.last_name}


class CheckoutLineSerializer(AliasedKeysMixin, serializers.Serializer):
    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField()
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    variant_details = StringMapField(required=False)


class CheckoutSerializer(AliasedKeysMixin, serializers.Serializer):
    items = CheckoutLineSerializer(many=True, allow_empty=False)
    shipping_address = serializers.DictField()
    billing_address = serializers.DictField()
    payment_method = serializers.CharField(max_length=32)
    payment_details = serializers.DictField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class OrderStatusUpdateSerializer(serializers.Serializer):
    """Allow-listed admin update: status plus optional tracking and notes."""

    status = serializers.ChoiceField(choices=OrderStatus.choices)
    tracking_number = serializers.CharField(max_length=100, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)
