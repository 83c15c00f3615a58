"""Bearer JWT authentication with machine-readable failure reasons.

simplejwt reports every bad token the same way. Clients of this API need to
tell an expired token (refresh and retry) from a bad one (sign in again), so
failures are re-raised as `Token expired` / `Invalid token`.
"""

import jwt
from rest_framework import exceptions
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.settings import api_settings

TOKEN_EXPIRED = "token_expired"
TOKEN_INVALID = "token_invalid"


def _is_expired(raw_token: bytes) -> bool:
    """True when the token has a valid signature and only its `exp` has passed."""
    try:
        jwt.decode(
            raw_token,
            api_settings.SIGNING_KEY,
            algorithms=[api_settings.ALGORITHM],
            options={"verify_aud": False},
        )
    except jwt.ExpiredSignatureError:
        return True
    except jwt.PyJWTError:
        return False
    return False


class BearerTokenAuthentication(JWTAuthentication):
    def get_validated_token(self, raw_token):
        try:
            return super().get_validated_token(raw_token)
        except InvalidToken:
            if _is_expired(raw_token):
                raise exceptions.AuthenticationFailed("Token expired", code=TOKEN_EXPIRED)
            raise exceptions.AuthenticationFailed("Invalid token", code=TOKEN_INVALID)

    def get_user(self, validated_token):
        try:
            return super().get_user(validated_token)
        except (InvalidToken, exceptions.AuthenticationFailed):
            raise exceptions.AuthenticationFailed("Invalid token", code=TOKEN_INVALID)
