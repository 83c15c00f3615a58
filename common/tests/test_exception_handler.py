from common.exceptions import CheckoutFailed, InsufficientStock, NotFound, api_exception_handler
from rest_framework import exceptions


def _handle(exc):
    return api_exception_handler(exc, {"view": None})


def test_store_errors_map_to_status_and_code():
    resp = _handle(InsufficientStock("Insufficient stock for Ring"))
    assert resp.status_code == 400
    assert resp.data == {"detail": "Insufficient stock for Ring", "code": "insufficient_stock"}

    assert _handle(NotFound("Order not found")).status_code == 404
    failed = _handle(CheckoutFailed())
    assert failed.status_code == 500
    assert failed.data["code"] == "checkout_failed"


def test_drf_errors_are_normalized():
    resp = _handle(exceptions.ValidationError({"quantity": ["Required."]}))
    assert resp.status_code == 400
    assert resp.data["code"] == "validation_error"
    assert resp.data["errors"] == {"quantity": ["Required."]}

    resp = _handle(exceptions.NotAuthenticated())
    assert resp.data == {"detail": "Access token required", "code": "token_missing"}

    resp = _handle(exceptions.PermissionDenied())
    assert resp.status_code == 403
    assert resp.data["code"] == "permission_denied"


def test_unexpected_errors_become_internal_error(settings):
    settings.DEBUG = False
    resp = _handle(RuntimeError("boom"))
    assert resp.status_code == 500
    assert resp.data == {"detail": "Internal server error", "code": "internal_error"}
