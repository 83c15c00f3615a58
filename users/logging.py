import logging

logger = logging.getLogger("auth")


def client_ip(request) -> str | None:
    """First hop of X-Forwarded-For when behind a proxy, else REMOTE_ADDR."""
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")


def log_auth_event(action: str, request, user=None, status: str = "success"):
    """Record a sign-in/sign-up/sign-out style event on the `auth` logger."""
    fields = {
        "event": f"auth.{action}",
        "status": status,
        "ip": client_ip(request),
        "user_agent": request.META.get("HTTP_USER_AGENT", "")[:200],
    }
    if user is not None:
        fields["user_id"] = user.pk
    level = logging.INFO if status == "success" else logging.WARNING
    logger.log(level, f"auth.{action}", extra=fields)
