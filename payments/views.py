"""Payment endpoints backed by Stripe."""

from common.choices import PaymentStatus
from common.exceptions import PaymentError
from common.permissions import IsStaff
from drf_spectacular.utils import OpenApiExample, extend_schema
from orders.services import attach_payment_intent, get_order, record_payment_outcome
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import PaymentConfirmSerializer, PaymentIntentCreateSerializer, RefundSerializer
from .services import PaymentService, confirm_and_record, from_minor_units, handle_webhook_event


class CreatePaymentIntentView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "payments"

    @extend_schema(
        tags=["Payments"],
        summary="Create payment intent",
        request=PaymentIntentCreateSerializer,
        examples=[
            OpenApiExample(
                "Intent",
                value={"client_secret": "pi_123_secret_456", "payment_intent_id": "pi_123"},
                response_only=True,
            )
        ],
    )
    def post(self, request):
        serializer = PaymentIntentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        metadata = dict(data.get("metadata") or {})
        metadata["user_id"] = str(request.user.id)

        order = None
        if data.get("order_id") is not None:
            order = get_order(user=request.user, order_id=data["order_id"])
            metadata["order_number"] = order.order_number

        amount = data.get("amount")
        if amount is None:
            amount = order.total_amount
        intent = PaymentService.create_payment_intent(amount, data["currency"], metadata)
        if order is not None:
            attach_payment_intent(user=request.user, order_id=order.id, payment_intent_id=intent["id"])
        return Response({"client_secret": intent["client_secret"], "payment_intent_id": intent["id"]})


class ConfirmPaymentView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "payments"

    @extend_schema(tags=["Payments"], summary="Confirm payment", request=PaymentConfirmSerializer)
    def post(self, request):
        serializer = PaymentConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        intent_id = serializer.validated_data["payment_intent_id"]
        status = confirm_and_record(intent_id)
        if status == "succeeded":
            return Response({"success": True, "status": status, "payment_intent_id": intent_id})
        if status == "requires_payment_method":
            raise PaymentError("Payment method is required", code="payment_method_required")
        raise PaymentError("Payment failed", code="payment_failed")


class RefundView(APIView):
    permission_classes = [IsStaff]
    throttle_scope = "payments"

    @extend_schema(tags=["Payments"], summary="Refund a payment (admin)", request=RefundSerializer)
    def post(self, request):
        serializer = RefundSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        refund = PaymentService.refund(data["payment_intent_id"], data.get("amount"), data.get("reason"))
        if data.get("amount") is None:
            record_payment_outcome(payment_intent_id=data["payment_intent_id"], payment_status=PaymentStatus.REFUNDED)
        return Response(
            {"refund_id": refund.id, "status": refund.status, "amount": str(from_minor_units(refund.amount))}
        )


class StripeWebhookView(APIView):
    """Stripe event receiver; authenticated by signature, not by token."""

    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_classes = []

    @extend_schema(tags=["Payments"], summary="Stripe webhook", request=None)
    def post(self, request):
        payload = request.body
        signature = request.META.get("HTTP_STRIPE_SIGNATURE", "")
        event = PaymentService.construct_webhook_event(payload, signature)
        handle_webhook_event(event)
        return Response({"received": True})
