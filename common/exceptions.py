"""Error taxonomy shared by services, plus the DRF exception handler.

Services raise the `StoreError` subclasses below; views let them propagate
and `api_exception_handler` turns them into `{"detail", "code"}` responses
with the matching HTTP status. DRF and Django exceptions are normalized to
the same shape.
"""

import logging

from django.conf import settings
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger("luxe.errors")

_STATUS_CODES = {
    status.HTTP_401_UNAUTHORIZED: "not_authenticated",
    status.HTTP_403_FORBIDDEN: "permission_denied",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_429_TOO_MANY_REQUESTS: "throttled",
}


class StoreError(Exception):
    """Base class for domain errors that map onto an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"
    default_code = "internal_error"

    def __init__(self, detail: str | None = None, code: str | None = None):
        self.detail = detail or self.default_detail
        self.code = code or self.default_code
        super().__init__(self.detail)


class ValidationFailed(StoreError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request."
    default_code = "validation_error"


class InvalidQuantity(ValidationFailed):
    default_detail = "Quantity must be at least 1."
    default_code = "invalid_quantity"


class AuthError(StoreError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Access token required"
    default_code = "not_authenticated"


class AuthorizationError(StoreError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Admin access required"
    default_code = "permission_denied"


class NotFound(StoreError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


class ConflictError(StoreError):
    """Request conflicts with current state (duplicates, stock)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request conflicts with the current state."
    default_code = "conflict"


class InsufficientStock(ConflictError):
    default_detail = "Insufficient stock."
    default_code = "insufficient_stock"


class AlreadyExists(ConflictError):
    default_detail = "Already exists."
    default_code = "already_exists"


class PaymentError(StoreError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Payment processing failed."
    default_code = "payment_error"


class InternalError(StoreError):
    pass


class CheckoutFailed(InternalError):
    default_detail = "Failed to create order"
    default_code = "checkout_failed"


def _error_body(detail, code: str, **extra) -> dict:
    body = {"detail": detail, "code": code}
    body.update(extra)
    return body


def api_exception_handler(exc, context):
    """Translate exceptions raised inside DRF views into JSON error responses."""

    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else None

    if isinstance(exc, StoreError):
        if exc.status_code >= 500:
            logger.error(
                "request_failed",
                exc_info=exc,
                extra={"event": "request_failed", "view": view_name, "code": exc.code},
            )
        return Response(_error_body(exc.detail, exc.code), status=exc.status_code)

    response = exception_handler(exc, context)

    if response is None:
        logger.error(
            "unhandled_exception",
            exc_info=exc,
            extra={"event": "unhandled_exception", "view": view_name},
        )
        detail = str(exc) if settings.DEBUG else InternalError.default_detail
        return Response(
            _error_body(detail, InternalError.default_code),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, drf_exceptions.ValidationError):
        response.data = _error_body("Validation failed.", ValidationFailed.default_code, errors=response.data)
    elif isinstance(exc, drf_exceptions.NotAuthenticated):
        response.data = _error_body(AuthError.default_detail, "token_missing")
    elif isinstance(response.data, dict) and "detail" in response.data:
        codes = exc.get_codes() if isinstance(exc, drf_exceptions.APIException) else None
        code = codes if isinstance(codes, str) else _STATUS_CODES.get(response.status_code, "error")
        response.data.setdefault("code", code)
    return response
