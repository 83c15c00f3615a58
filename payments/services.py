"""Stripe delegation.

`PaymentService` wraps the few Stripe calls the store needs. Gateway errors
are logged and re-raised as `PaymentError` with a generic message; the
Stripe error text never reaches the client.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import stripe
from common.choices import Currency, PaymentStatus, RefundReason
from common.exceptions import PaymentError, ValidationFailed
from django.conf import settings
from orders.services import record_payment_outcome

logger = logging.getLogger("luxe.payments")

INTENT_STATUS_MAP = {
    "succeeded": PaymentStatus.PAID,
    "requires_payment_method": PaymentStatus.FAILED,
    "canceled": PaymentStatus.FAILED,
}


def to_minor_units(amount) -> int:
    """Decimal major units to integer cents (half-up)."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(amount: Optional[int]) -> Optional[Decimal]:
    if amount is None:
        return None
    return (Decimal(amount) / 100).quantize(Decimal("0.01"))


class PaymentService:
    """Thin wrapper over the Stripe SDK."""

    @staticmethod
    def _api_key() -> str:
        return settings.STRIPE_SECRET_KEY

    @staticmethod
    def create_payment_intent(amount, currency: str = Currency.USD, metadata: Optional[dict] = None) -> dict:
        amount = Decimal(amount)
        if amount < settings.STRIPE_MIN_CHARGE:
            raise ValidationFailed(f"Amount must be at least {settings.STRIPE_MIN_CHARGE}")
        if currency not in Currency.values:
            raise ValidationFailed(f"Unsupported currency: {currency}")
        try:
            intent = stripe.PaymentIntent.create(
                amount=to_minor_units(amount),
                currency=currency,
                metadata=metadata or {},
                automatic_payment_methods={"enabled": True},
                api_key=PaymentService._api_key(),
            )
        except stripe.StripeError as exc:
            logger.error("payment_intent_failed", exc_info=exc, extra={"event": "payment_intent_failed"})
            raise PaymentError() from exc
        logger.info(
            "payment_intent_created",
            extra={"event": "payment_intent_created", "payment_intent_id": intent.id, "amount": str(amount)},
        )
        return {"client_secret": intent.client_secret, "id": intent.id}

    @staticmethod
    def confirm_payment(payment_intent_id: str) -> str:
        """Return the intent's current Stripe status string."""
        try:
            intent = stripe.PaymentIntent.retrieve(payment_intent_id, api_key=PaymentService._api_key())
        except stripe.StripeError as exc:
            logger.error(
                "payment_confirm_failed",
                exc_info=exc,
                extra={"event": "payment_confirm_failed", "payment_intent_id": payment_intent_id},
            )
            raise PaymentError() from exc
        return intent.status

    @staticmethod
    def refund(payment_intent_id: str, amount=None, reason: Optional[str] = None):
        if reason is not None and reason not in RefundReason.values:
            raise ValidationFailed(f"Invalid refund reason: {reason}")
        params = {"payment_intent": payment_intent_id}
        if amount is not None:
            params["amount"] = to_minor_units(amount)
        if reason:
            params["reason"] = reason
        try:
            refund = stripe.Refund.create(api_key=PaymentService._api_key(), **params)
        except stripe.StripeError as exc:
            logger.error(
                "refund_failed",
                exc_info=exc,
                extra={"event": "refund_failed", "payment_intent_id": payment_intent_id},
            )
            raise PaymentError("Refund failed.") from exc
        logger.info(
            "refund_created",
            extra={"event": "refund_created", "payment_intent_id": payment_intent_id, "refund_id": refund.id},
        )
        return refund

    @staticmethod
    def construct_webhook_event(payload: bytes, signature: str):
        try:
            return stripe.Webhook.construct_event(payload, signature, settings.STRIPE_WEBHOOK_SECRET)
        except (ValueError, stripe.SignatureVerificationError) as exc:
            logger.warning("webhook_rejected", extra={"event": "webhook_rejected", "reason": str(exc)})
            raise PaymentError("Invalid webhook signature", code="invalid_signature") from exc


def confirm_and_record(payment_intent_id: str) -> str:
    """Fetch the intent status and apply it to matching orders."""

    status = PaymentService.confirm_payment(payment_intent_id)
    payment_status = INTENT_STATUS_MAP.get(status)
    if payment_status:
        record_payment_outcome(payment_intent_id=payment_intent_id, payment_status=payment_status)
    return status


def handle_webhook_event(event) -> Optional[str]:
    """Apply a verified Stripe event. Returns the payment status set, if any."""

    event_type = event["type"]
    obj = event["data"]["object"]
    if event_type == "payment_intent.succeeded":
        intent_id, payment_status = obj["id"], PaymentStatus.PAID
    elif event_type == "payment_intent.payment_failed":
        intent_id, payment_status = obj["id"], PaymentStatus.FAILED
    elif event_type == "charge.refunded" and obj.get("refunded"):
        intent_id, payment_status = obj.get("payment_intent"), PaymentStatus.REFUNDED
    else:
        logger.info("webhook_ignored", extra={"event": "webhook_ignored", "type": event_type})
        return None

    updated = record_payment_outcome(payment_intent_id=intent_id, payment_status=payment_status)
    logger.info(
        "webhook_processed",
        extra={"event": "webhook_processed", "type": event_type, "payment_intent_id": intent_id, "orders": updated},
    )
    return payment_status
