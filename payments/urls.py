"""URL routes for payments, mounted at /api/v1/payments/."""

from django.urls import path

from .views import ConfirmPaymentView, CreatePaymentIntentView, RefundView, StripeWebhookView

urlpatterns = [
    path("create-payment-intent/", CreatePaymentIntentView.as_view(), name="payment-intent-create"),
    path("confirm/", ConfirmPaymentView.as_view(), name="payment-confirm"),
    path("refund/", RefundView.as_view(), name="payment-refund"),
    path("webhook/", StripeWebhookView.as_view(), name="payment-webhook"),
]
