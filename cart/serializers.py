"""Cart serializers for read and write operations."""

from common.json_fields import StringMapField
from rest_framework import serializers

from .models import CartItem


class CartItemReadSerializer(serializers.ModelSerializer):
    """Read serializer for a cart line with the product info a cart page needs."""

    product_id = serializers.IntegerField(source="product.id")
    product_name = serializers.CharField(source="product.name")
    product_slug = serializers.CharField(source="product.slug")
    price = serializers.DecimalField(source="product.price", max_digits=12, decimal_places=2)
    image = serializers.CharField(source="product.primary_image", allow_null=True)
    stock_quantity = serializers.IntegerField(source="product.stock_quantity")
    variant_details = StringMapField()
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = CartItem
        fields = [
            "id",
            "product_id",
            "product_name",
            "product_slug",
            "price",
            "image",
            "stock_quantity",
            "quantity",
            "variant_details",
            "line_total",
        ]


class CartReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    items = CartItemReadSerializer(many=True)
    item_count = serializers.IntegerField()
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)
    estimated_tax = serializers.DecimalField(max_digits=12, decimal_places=2)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)


class AddItemSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField(default=1)
    variant_details = StringMapField(required=False)


class UpdateItemQuantitySerializer(serializers.Serializer):
    quantity = serializers.IntegerField()


class MergeCartSerializer(serializers.Serializer):
    """Client-held cart lines; malformed entries are skipped by the service."""

    items = serializers.ListField(child=serializers.DictField(), allow_empty=True)
