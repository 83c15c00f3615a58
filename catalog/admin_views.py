"""Admin viewsets for write endpoints in the catalog app.

Endpoints are restricted to staff users and use scoped throttling.
"""

from common.pagination import ProductPagination
from common.permissions import IsStaff
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from .admin_serializers import (
    CategoryAdminSerializer,
    ProductAdminSerializer,
    ProductAdminUpdateSerializer,
    StockUpdateSerializer,
)
from .models import Category, Product
from .selectors import search_products
from .services import deactivate_product, set_stock


class AdminBaseViewSet(viewsets.ModelViewSet):
    permission_classes = [IsStaff]
    throttle_scope = "admin"


@extend_schema_view(
    list=extend_schema(tags=["Admin Endpoints"], summary="List categories (admin)"),
    retrieve=extend_schema(tags=["Admin Endpoints"], summary="Get category (admin)"),
    create=extend_schema(tags=["Admin Endpoints"], summary="Create category"),
    update=extend_schema(tags=["Admin Endpoints"], summary="Update category"),
    partial_update=extend_schema(tags=["Admin Endpoints"], summary="Partial update category"),
    destroy=extend_schema(tags=["Admin Endpoints"], summary="Delete category"),
)
class CategoryAdminViewSet(AdminBaseViewSet):
    queryset = Category.objects.all().order_by("sort_order", "name")
    serializer_class = CategoryAdminSerializer


@extend_schema_view(
    list=extend_schema(tags=["Admin Endpoints"], summary="List products (admin)"),
    retrieve=extend_schema(tags=["Admin Endpoints"], summary="Get product (admin)"),
    create=extend_schema(tags=["Admin Endpoints"], summary="Create product"),
    update=extend_schema(tags=["Admin Endpoints"], summary="Update product"),
    partial_update=extend_schema(tags=["Admin Endpoints"], summary="Partial update product"),
    destroy=extend_schema(tags=["Admin Endpoints"], summary="Deactivate product"),
)
class ProductAdminViewSet(AdminBaseViewSet):
    """Product CRUD for staff. Includes inactive products; delete is soft."""

    pagination_class = ProductPagination

    def get_queryset(self):
        qs = Product.objects.select_related("category").order_by("-created_at")
        search = self.request.query_params.get("search")
        if search:
            qs = search_products(qs, search)
        return qs

    def get_serializer_class(self):
        if self.action in ("update", "partial_update"):
            return ProductAdminUpdateSerializer
        return ProductAdminSerializer

    def update(self, request, *args, **kwargs):
        kwargs["partial"] = True
        return super().update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        deactivate_product(product=self.get_object())
        return Response({"detail": "Product deactivated."}, status=status.HTTP_200_OK)

    @extend_schema(tags=["Admin Endpoints"], summary="Set product stock", request=StockUpdateSerializer)
    @action(detail=True, methods=["patch"], url_path="stock")
    def stock(self, request, pk=None):
        serializer = StockUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = set_stock(product_id=self.get_object().pk, **serializer.validated_data)
        return Response(ProductAdminSerializer(product).data)
