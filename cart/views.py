"""DRF views for cart operations."""

from drf_spectacular.utils import OpenApiExample, extend_schema, inline_serializer
from rest_framework import serializers as rf_serializers
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import cart_item_count, cart_summary
from .serializers import AddItemSerializer, CartReadSerializer, MergeCartSerializer, UpdateItemQuantitySerializer
from .services import add_item, clear_cart, get_or_create_cart, merge_guest_cart, remove_item, update_item_quantity


class CartDetailView(APIView):
    """Return the authenticated user's cart."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "cart"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Get cart",
        description="Returns the user's cart with product info, item count, subtotal, estimated tax and total.",
        responses=CartReadSerializer,
        examples=[
            OpenApiExample(
                "Cart",
                value={
                    "id": 1,
                    "items": [
                        {
                            "id": 10,
                            "product_id": 100,
                            "product_name": "Solitaire Diamond Ring",
                            "product_slug": "solitaire-diamond-ring",
                            "price": "2499.00",
                            "image": None,
                            "stock_quantity": 10,
                            "quantity": 1,
                            "variant_details": {"size": "6"},
                            "line_total": "2499.00",
                        }
                    ],
                    "item_count": 1,
                    "subtotal": "2499.00",
                    "estimated_tax": "199.92",
                    "total": "2698.92",
                },
                response_only=True,
            )
        ],
    )
    def get(self, request):
        cart = get_or_create_cart(request.user)
        return Response(CartReadSerializer(cart_summary(cart)).data)


class CartCountView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "cart"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Cart item count",
        responses=inline_serializer("CartCount", {"count": rf_serializers.IntegerField()}),
    )
    def get(self, request):
        return Response({"count": cart_item_count(request.user)})


class CartAddItemView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Add item to cart",
        description="Merges into an existing line for the same product and variant. 400 when stock is short.",
        request=AddItemSerializer,
        responses={
            201: inline_serializer(
                "CartItemAdded",
                {
                    "cart_item_id": rf_serializers.IntegerField(),
                    "product_name": rf_serializers.CharField(),
                    "quantity": rf_serializers.IntegerField(),
                    "price": rf_serializers.DecimalField(max_digits=12, decimal_places=2),
                },
            )
        },
    )
    def post(self, request):
        serializer = AddItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = add_item(user=request.user, **serializer.validated_data)
        body = {
            "cart_item_id": item.id,
            "product_name": item.product.name,
            "quantity": item.quantity,
            "price": str(item.product.price),
        }
        return Response(body, status=status.HTTP_201_CREATED)


class CartItemView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(tags=["Cart Endpoints"], summary="Update cart item quantity", request=UpdateItemQuantitySerializer)
    def patch(self, request, item_id: int):
        serializer = UpdateItemQuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = update_item_quantity(user=request.user, item_id=item_id, **serializer.validated_data)
        return Response({"cart_item_id": item.id, "quantity": item.quantity})

    @extend_schema(tags=["Cart Endpoints"], summary="Remove cart item")
    def delete(self, request, item_id: int):
        remove_item(user=request.user, item_id=item_id)
        return Response({"detail": "Item removed from cart."})


class CartClearView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(tags=["Cart Endpoints"], summary="Clear cart")
    def delete(self, request):
        removed = clear_cart(user=request.user)
        return Response({"detail": "Cart cleared.", "removed_items": removed})


class CartMergeView(APIView):
    """Merge a guest (client-held) cart into the user's cart after sign-in."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Merge guest cart",
        request=MergeCartSerializer,
        examples=[
            OpenApiExample(
                "Merge",
                value={"items": [{"product_id": 1, "quantity": 2}, {"product_id": 9, "quantity": 1}]},
                request_only=True,
            ),
            OpenApiExample("Merged", value={"merged_items": 1, "skipped_items": 1}, response_only=True),
        ],
    )
    def post(self, request):
        serializer = MergeCartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = merge_guest_cart(user=request.user, guest_items=serializer.validated_data["items"])
        return Response(result)
