"""Admin serializers for write endpoints in the catalog app.

Each serializer lists exactly the columns staff may write; any other key
in the request body is ignored and never reaches the ORM.
"""

from common.json_fields import StringListField, StringMapField
from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from .models import Category, Product
from .services import unique_slug

PRODUCT_WRITABLE_FIELDS = [
    "name",
    "slug",
    "description",
    "short_description",
    "sku",
    "price",
    "compare_price",
    "stock_quantity",
    "low_stock_threshold",
    "category",
    "is_active",
    "is_featured",
    "is_bestseller",
    "is_new_arrival",
    "images",
    "tags",
    "specifications",
    "meta_title",
    "meta_description",
]


class CategoryAdminSerializer(serializers.ModelSerializer):
    slug = serializers.SlugField(
        max_length=140, required=False, validators=[UniqueValidator(queryset=Category.objects.all())]
    )

    class Meta:
        model = Category
        fields = ["id", "name", "slug", "description", "image_url", "is_active", "sort_order"]

    def validate(self, attrs):
        if self.instance is None and not attrs.get("slug"):
            attrs["slug"] = unique_slug(attrs["name"], model=Category)
        return attrs


class ProductAdminSerializer(serializers.ModelSerializer):
    """Create/read serializer; slug is derived from the name when omitted."""

    slug = serializers.SlugField(
        max_length=220, required=False, validators=[UniqueValidator(queryset=Product.objects.all())]
    )
    category = serializers.PrimaryKeyRelatedField(queryset=Category.objects.all(), required=False, allow_null=True)
    images = StringListField(required=False)
    tags = StringListField(required=False)
    specifications = StringMapField(required=False)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    stock_quantity = serializers.IntegerField(min_value=0, required=False)

    class Meta:
        model = Product
        fields = ["id"] + PRODUCT_WRITABLE_FIELDS + ["created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_sku(self, value):
        return value or None

    def validate(self, attrs):
        if self.instance is None and not attrs.get("slug"):
            attrs["slug"] = unique_slug(attrs["name"])
        return attrs


class ProductAdminUpdateSerializer(ProductAdminSerializer):
    """Partial update; every writable column is optional."""

    name = serializers.CharField(max_length=200, required=False)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)


class StockUpdateSerializer(serializers.Serializer):
    stock_quantity = serializers.IntegerField(min_value=0)
