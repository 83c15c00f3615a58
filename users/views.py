"""Users app API views.

Endpoints:
- register: creates a customer account and returns JWTs.
- signin / refresh / verify / signout: JWT lifecycle (signout blacklists).
- profile: read or update the authenticated user's profile.
- change-password: rotate the password after checking the current one.
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken, TokenError
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView, TokenVerifyView

from .logging import log_auth_event
from .serializers import (
    EmailOrPhoneTokenObtainPairSerializer,
    PasswordChangeSerializer,
    ProfileUpdateSerializer,
    RegistrationSerializer,
    SignOutSerializer,
    UserSerializer,
    tokens_for,
)
from .services import change_password, send_welcome_email


@extend_schema(
    operation_id="users_profile",
    summary="Get or update current user profile",
    description=(
        "GET returns the authenticated user's profile. PATCH updates "
        "first_name, last_name and phone; other keys are ignored.\n\n"
        "Errors: 401 if the bearer token is missing, expired or invalid."
    ),
    tags=["User Endpoints"],
    request=ProfileUpdateSerializer,
    responses={
        200: OpenApiResponse(description="User profile", response=UserSerializer),
        401: OpenApiResponse(description="Unauthorized"),
    },
)
@api_view(["GET", "PATCH"])
@permission_classes([IsAuthenticated])
@throttle_classes([ScopedRateThrottle])
def profile(request):
    """Return or update the authenticated user's profile."""
    if request.method == "PATCH":
        serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        log_auth_event("profile_update", request, user=request.user)
    return Response(UserSerializer(request.user).data)


profile.throttle_scope = "profile"


@extend_schema(
    tags=["User Endpoints"],
    summary="Register",
    request=RegistrationSerializer,
    responses={201: OpenApiResponse(description="User and tokens")},
)
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([ScopedRateThrottle])
def register(request):
    """Create a customer account and sign it in."""
    serializer = RegistrationSerializer(data=request.data)
    if not serializer.is_valid():
        log_auth_event("register", request, status="invalid")
        raise ValidationError(serializer.errors)
    user = serializer.save()
    send_welcome_email(user)
    log_auth_event("register", request, user=user)
    return Response({"user": UserSerializer(user).data, **tokens_for(user)}, status=status.HTTP_201_CREATED)


register.throttle_scope = "register"


@extend_schema(tags=["User Endpoints"], summary="Change password", request=PasswordChangeSerializer)
@api_view(["POST"])
@permission_classes([IsAuthenticated])
@throttle_classes([ScopedRateThrottle])
def password_change(request):
    serializer = PasswordChangeSerializer(data=request.data, context={"request": request})
    serializer.is_valid(raise_exception=True)
    change_password(user=request.user, new_password=serializer.validated_data["new_password"])
    log_auth_event("password_change", request, user=request.user)
    return Response({"detail": "Password changed."})


password_change.throttle_scope = "password_change"


class SignOutView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "signout"
    permission_classes = [AllowAny]

    @extend_schema(tags=["User Endpoints"], summary="Sign out", request=SignOutSerializer)
    def post(self, request):
        serializer = SignOutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            RefreshToken(serializer.validated_data["refresh"]).blacklist()
        except TokenError:
            log_auth_event("signout", request, status="invalid_token")
            return Response({"detail": "Invalid token", "code": "token_invalid"}, status=status.HTTP_400_BAD_REQUEST)
        log_auth_event("signout", request)
        return Response({"detail": "Signed out."}, status=status.HTTP_205_RESET_CONTENT)


class SignInView(TokenObtainPairView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "signin"
    serializer_class = EmailOrPhoneTokenObtainPairSerializer

    @extend_schema(tags=["User Endpoints"], summary="Sign in with email or phone")
    def post(self, request, *args, **kwargs):
        try:
            resp = super().post(request, *args, **kwargs)
        except Exception:
            log_auth_event("signin", request, status="failed")
            raise
        log_auth_event("signin", request)
        return resp


class RefreshView(TokenRefreshView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "token_refresh"

    @extend_schema(tags=["User Endpoints"], summary="Refresh access token")
    def post(self, request, *args, **kwargs):
        resp = super().post(request, *args, **kwargs)
        log_auth_event("token_refresh", request, status="success" if resp.status_code == 200 else "failed")
        return resp


class VerifyView(TokenVerifyView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "token_verify"

    @extend_schema(tags=["User Endpoints"], summary="Verify token")
    def post(self, request, *args, **kwargs):
        resp = super().post(request, *args, **kwargs)
        log_auth_event("token_verify", request, status="success" if resp.status_code == 200 else "failed")
        return resp
