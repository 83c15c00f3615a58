from common.choices import Currency, RefundReason
from rest_framework import serializers


class PaymentIntentCreateSerializer(serializers.Serializer):
    """Amount in major units; when `order_id` is given the order total is used if amount is omitted."""

    amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    currency = serializers.ChoiceField(choices=Currency.choices, default=Currency.USD)
    metadata = serializers.DictField(child=serializers.CharField(max_length=500), required=False)
    order_id = serializers.IntegerField(required=False)

    def validate(self, attrs):
        if attrs.get("amount") is None and attrs.get("order_id") is None:
            raise serializers.ValidationError({"amount": "This field is required."})
        return attrs


class PaymentConfirmSerializer(serializers.Serializer):
    payment_intent_id = serializers.CharField(max_length=255)

    def to_internal_value(self, data):
        if hasattr(data, "get") and "paymentIntentId" in data and "payment_intent_id" not in data:
            data = {"payment_intent_id": data.get("paymentIntentId")}
        return super().to_internal_value(data)


class RefundSerializer(serializers.Serializer):
    payment_intent_id = serializers.CharField(max_length=255)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, min_value=0)
    reason = serializers.ChoiceField(choices=RefundReason.choices, required=False)
