"""Staff-only endpoints for managing customer accounts."""

from common.pagination import UserPagination
from common.permissions import IsStaff
from django.db.models import Q
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import generics, status
from rest_framework.response import Response

from .logging import log_auth_event
from .models import User
from .serializers import UserAdminCreateSerializer, UserAdminUpdateSerializer, UserSerializer
from .services import delete_user


class UserAdminListView(generics.ListCreateAPIView):
    """List accounts with optional `search` (name/email) and `role` (admin|customer); create accounts."""

    permission_classes = [IsStaff]
    throttle_scope = "admin"
    serializer_class = UserSerializer
    pagination_class = UserPagination

    def get_serializer_class(self):
        if self.request.method == "POST":
            return UserAdminCreateSerializer
        return UserSerializer

    def get_queryset(self):
        qs = User.objects.order_by("-date_joined")
        search = self.request.query_params.get("search")
        if search:
            qs = qs.filter(
                Q(first_name__icontains=search) | Q(last_name__icontains=search) | Q(email__icontains=search)
            )
        role = self.request.query_params.get("role")
        if role == "admin":
            qs = qs.filter(is_staff=True)
        elif role == "customer":
            qs = qs.filter(is_staff=False)
        return qs

    @extend_schema(
        tags=["Admin Endpoints"],
        summary="List users (admin)",
        parameters=[
            OpenApiParameter("search", OpenApiTypes.STR, description="Match first/last name or email"),
            OpenApiParameter("role", OpenApiTypes.STR, description="`admin` or `customer`"),
        ],
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        tags=["Admin Endpoints"],
        summary="Create user (admin)",
        request=UserAdminCreateSerializer,
        responses={201: UserSerializer},
    )
    def post(self, request, *args, **kwargs):
        serializer = UserAdminCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        log_auth_event("admin_create_user", request, user=user)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class UserAdminDetailView(generics.GenericAPIView):
    permission_classes = [IsStaff]
    throttle_scope = "admin"
    serializer_class = UserAdminUpdateSerializer
    queryset = User.objects.all()
    lookup_url_kwarg = "user_id"

    @extend_schema(tags=["Admin Endpoints"], summary="Get user (admin)", responses=UserSerializer)
    def get(self, request, user_id: int):
        return Response(UserSerializer(self.get_object()).data)

    @extend_schema(tags=["Admin Endpoints"], summary="Update user (admin)", responses=UserSerializer)
    def patch(self, request, user_id: int):
        user = self.get_object()
        serializer = self.get_serializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(UserSerializer(user).data)

    @extend_schema(tags=["Admin Endpoints"], summary="Delete user (admin)", responses={204: None})
    def delete(self, request, user_id: int):
        delete_user(actor=request.user, user=self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)
