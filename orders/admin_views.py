"""Admin order management: list across users, detail and status updates."""

from common.exceptions import NotFound
from common.pagination import OrderPagination
from common.permissions import IsStaff
from django.db.models import Q
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import generics
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Order
from .serializers import AdminOrderSerializer, OrderStatusUpdateSerializer
from .services import update_order_status


def _get_order(order_id: int) -> Order:
    order = Order.objects.select_related("user").prefetch_related("items").filter(pk=order_id).first()
    if order is None:
        raise NotFound("Order not found")
    return order


class AdminOrderListView(generics.ListAPIView):
    permission_classes = [IsStaff]
    serializer_class = AdminOrderSerializer
    pagination_class = OrderPagination
    throttle_scope = "admin"

    def get_queryset(self):
        qs = Order.objects.select_related("user").prefetch_related("items")
        params = self.request.query_params
        if params.get("status"):
            qs = qs.filter(status=params["status"])
        search = (params.get("search") or "").strip()
        if search:
            qs = qs.filter(
                Q(order_number__icontains=search) | Q(email__icontains=search) | Q(user__email__icontains=search)
            )
        return qs

    @extend_schema(
        tags=["Admin Endpoints"],
        summary="List all orders",
        parameters=[
            OpenApiParameter(name="status", required=False, type=str),
            OpenApiParameter(name="search", description="Order number or email", required=False, type=str),
        ],
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class AdminOrderDetailView(APIView):
    permission_classes = [IsStaff]
    throttle_scope = "admin"

    @extend_schema(tags=["Admin Endpoints"], summary="Get any order", responses=AdminOrderSerializer)
    def get(self, request, order_id: int):
        return Response(AdminOrderSerializer(_get_order(order_id)).data)


class AdminOrderStatusView(APIView):
    permission_classes = [IsStaff]
    throttle_scope = "admin"

    @extend_schema(
        tags=["Admin Endpoints"],
        summary="Update order status",
        request=OrderStatusUpdateSerializer,
        responses=AdminOrderSerializer,
    )
    def patch(self, request, order_id: int):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        update_order_status(order=_get_order(order_id), **serializer.validated_data)
        return Response(AdminOrderSerializer(_get_order(order_id)).data)
