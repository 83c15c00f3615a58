"""Serializers for the public catalog endpoints."""

from common.json_fields import StringListField, StringMapField
from rest_framework import serializers

from .models import Category, Product, ProductReview


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "slug", "description", "image_url", "sort_order"]


class CategoryRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "slug"]


class ProductListSerializer(serializers.ModelSerializer):
    category = CategoryRefSerializer(read_only=True)
    primary_image = serializers.CharField(read_only=True, allow_null=True)
    average_rating = serializers.SerializerMethodField()
    review_count = serializers.SerializerMethodField()
    in_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "slug",
            "short_description",
            "price",
            "compare_price",
            "discount_percentage",
            "category",
            "primary_image",
            "is_featured",
            "is_bestseller",
            "is_new_arrival",
            "in_stock",
            "average_rating",
            "review_count",
        ]

    def get_average_rating(self, obj) -> float | None:
        value = getattr(obj, "average_rating", None)
        return round(float(value), 2) if value is not None else None

    def get_review_count(self, obj) -> int:
        return getattr(obj, "review_count", 0) or 0


class ProductDetailSerializer(ProductListSerializer):
    images = StringListField(read_only=True)
    tags = StringListField(read_only=True)
    specifications = StringMapField(read_only=True)
    related_products = serializers.SerializerMethodField()

    class Meta(ProductListSerializer.Meta):
        fields = ProductListSerializer.Meta.fields + [
            "description",
            "sku",
            "stock_quantity",
            "images",
            "tags",
            "specifications",
            "meta_title",
            "meta_description",
            "created_at",
            "related_products",
        ]

    def get_related_products(self, obj) -> list[dict]:
        related = self.context.get("related_products", [])
        return ProductListSerializer(related, many=True).data


class ReviewSerializer(serializers.ModelSerializer):
    user_name = serializers.SerializerMethodField()

    class Meta:
        model = ProductReview
        fields = ["id", "rating", "title", "comment", "user_name", "created_at"]
        read_only_fields = ["id", "user_name", "created_at"]

    def get_user_name(self, obj) -> str:
        full = f"{obj.user.first_name} {obj.user.last_name}".strip()
        return full or obj.user.email.split("@")[0]
