"""Orders API endpoints for the authenticated customer."""

from common.pagination import OrderPagination
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema, inline_serializer
from rest_framework import generics
from rest_framework import serializers as rf_serializers
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import CheckoutSerializer, OrderSerializer
from .services import cancel_order, checkout, get_order, list_orders


class OrderListView(generics.ListAPIView):
    """List the user's orders, newest first, optionally filtered by status."""

    permission_classes = [IsAuthenticated]
    serializer_class = OrderSerializer
    pagination_class = OrderPagination
    throttle_scope = "orders"

    def get_queryset(self):
        return list_orders(user=self.request.user, status=self.request.query_params.get("status"))

    @extend_schema(
        tags=["Orders"],
        summary="List orders",
        parameters=[
            OpenApiParameter(name="status", description="Order status filter", required=False, type=str),
            OpenApiParameter(name="page", description="Page number", required=False, type=int),
            OpenApiParameter(name="limit", description="Items per page", required=False, type=int),
        ],
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class OrderCheckoutView(APIView):
    """Place an order from priced line items.

    Totals use the prices sent by the client; stock is checked before and
    re-checked under lock during the transaction.
    """

    permission_classes = [IsAuthenticated]
    throttle_scope = "orders_write"

    @extend_schema(
        tags=["Orders"],
        summary="Checkout",
        request=CheckoutSerializer,
        responses={
            200: inline_serializer(
                "CheckoutResult",
                {
                    "order": OrderSerializer(),
                    "orderNumber": rf_serializers.CharField(),
                    "total": rf_serializers.DecimalField(max_digits=12, decimal_places=2),
                },
            )
        },
        examples=[
            OpenApiExample(
                "Checkout",
                value={
                    "items": [
                        {"product_id": 1, "quantity": 2, "price": "100.00"},
                        {"product_id": 2, "quantity": 1, "price": "49.50"},
                    ],
                    "shippingAddress": {"line1": "1 Main St", "city": "Springfield", "postal_code": "12345"},
                    "billingAddress": {"line1": "1 Main St", "city": "Springfield", "postal_code": "12345"},
                    "paymentMethod": "card",
                },
                request_only=True,
            ),
            OpenApiExample(
                "Created",
                value={"order": {"id": 1}, "orderNumber": "ORD-1735689600000-AB12CD34E", "total": "269.46"},
                response_only=True,
            ),
        ],
    )
    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = checkout(user=request.user, **serializer.validated_data)
        return Response(
            {
                "order": OrderSerializer(order).data,
                "orderNumber": order.order_number,
                "total": str(order.total_amount),
            }
        )


class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "orders"

    @extend_schema(tags=["Orders"], summary="Get order detail", responses=OrderSerializer)
    def get(self, request, order_id: int):
        return Response(OrderSerializer(get_order(user=request.user, order_id=order_id)).data)


class OrderCancelView(APIView):
    """Cancel an order for the authenticated owner and restore its stock."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "orders_write"

    @extend_schema(
        tags=["Orders"],
        summary="Cancel order",
        description="Cancels the order unless it is already cancelled or delivered.",
        request=None,
        responses={200: OrderSerializer},
        examples=[
            OpenApiExample(
                "Already cancelled",
                value={"detail": "Order is already cancelled", "code": "validation_error"},
                response_only=True,
                status_codes=["400"],
            ),
        ],
    )
    def post(self, request, order_id: int):
        order = cancel_order(user=request.user, order_id=order_id)
        return Response(OrderSerializer(get_order(user=request.user, order_id=order.id)).data)
