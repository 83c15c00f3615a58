"""Wishlist endpoints for the authenticated user."""

from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import serializers as rf_serializers
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import WishlistAddSerializer, WishlistItemSerializer
from .services import (
    add_to_wishlist,
    clear_wishlist,
    is_in_wishlist,
    list_wishlist,
    remove_by_entry_id,
    remove_by_product_id,
)


class WishlistView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "wishlist"

    @extend_schema(tags=["Wishlist"], summary="List wishlist", responses=WishlistItemSerializer(many=True))
    def get(self, request):
        items = list_wishlist(user=request.user)
        return Response({"items": WishlistItemSerializer(items, many=True).data, "count": len(items)})

    @extend_schema(tags=["Wishlist"], summary="Add product to wishlist", request=WishlistAddSerializer)
    def post(self, request):
        serializer = WishlistAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = add_to_wishlist(user=request.user, **serializer.validated_data)
        return Response(WishlistItemSerializer(entry).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Wishlist"], summary="Clear wishlist")
    def delete(self, request):
        removed = clear_wishlist(user=request.user)
        return Response({"detail": "Wishlist cleared.", "removed_items": removed})


class WishlistEntryView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "wishlist"

    @extend_schema(tags=["Wishlist"], summary="Remove wishlist entry by id")
    def delete(self, request, entry_id: int):
        remove_by_entry_id(user=request.user, entry_id=entry_id)
        return Response({"detail": "Removed from wishlist."})


class WishlistProductView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "wishlist"

    @extend_schema(tags=["Wishlist"], summary="Remove product from wishlist")
    def delete(self, request, product_id: int):
        remove_by_product_id(user=request.user, product_id=product_id)
        return Response({"detail": "Removed from wishlist."})


class WishlistCheckView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "wishlist"

    @extend_schema(
        tags=["Wishlist"],
        summary="Is product in wishlist",
        responses=inline_serializer("WishlistCheck", {"in_wishlist": rf_serializers.BooleanField()}),
    )
    def get(self, request, product_id: int):
        return Response({"in_wishlist": is_in_wishlist(user=request.user, product_id=product_id)})
