"""Public catalog endpoints: product list, featured, categories, detail, reviews."""

from common.exceptions import NotFound
from common.pagination import ProductPagination
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.views import APIView

from . import selectors
from .filters import ProductFilter
from .serializers import CategorySerializer, ProductDetailSerializer, ProductListSerializer, ReviewSerializer
from .services import create_review


class ProductListView(generics.ListAPIView):
    """Active products, filterable by category, price range and search.

    Sorting uses `sort` (created_at, price, name, rating) and `order`
    (asc/desc); pagination uses `page` and `limit`.
    """

    serializer_class = ProductListSerializer
    pagination_class = ProductPagination
    filter_backends = [DjangoFilterBackend]
    filterset_class = ProductFilter
    throttle_scope = "catalog"

    def get_queryset(self):
        params = self.request.query_params
        return selectors.list_products(sort=params.get("sort"), order=params.get("order"))

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="List products",
        parameters=[
            OpenApiParameter("sort", OpenApiTypes.STR, enum=list(selectors.SORT_FIELDS)),
            OpenApiParameter("order", OpenApiTypes.STR, enum=["asc", "desc"]),
        ],
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class FeaturedProductsView(APIView):
    throttle_scope = "catalog"

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="Featured products",
        parameters=[OpenApiParameter("limit", OpenApiTypes.INT, description="Defaults to 8")],
        responses=ProductListSerializer(many=True),
    )
    def get(self, request):
        try:
            limit = max(1, min(int(request.query_params.get("limit", 8)), 50))
        except ValueError:
            limit = 8
        products = selectors.featured_products(limit)
        return Response({"products": ProductListSerializer(products, many=True).data})


class CategoryListView(APIView):
    throttle_scope = "catalog"

    @extend_schema(tags=["Catalog Endpoints"], summary="List categories", responses=CategorySerializer(many=True))
    def get(self, request):
        categories = selectors.list_categories()
        return Response({"categories": CategorySerializer(categories, many=True).data})


class ProductDetailView(APIView):
    throttle_scope = "catalog"

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="Get product by id or slug",
        responses=ProductDetailSerializer,
    )
    def get(self, request, identifier: str):
        product = selectors.get_product(identifier)
        if product is None:
            raise NotFound("Product not found")
        context = {"related_products": list(selectors.related_products(product))}
        return Response(ProductDetailSerializer(product, context=context).data)


class ProductReviewsView(APIView):
    """Approved reviews for a product; authenticated users may add one."""

    permission_classes = [IsAuthenticatedOrReadOnly]
    throttle_scope = "catalog"

    @extend_schema(tags=["Catalog Endpoints"], summary="List product reviews", responses=ReviewSerializer(many=True))
    def get(self, request, product_id: int):
        product = selectors.get_product(product_id)
        if product is None:
            raise NotFound("Product not found")
        reviews = selectors.list_reviews(product)
        return Response({"reviews": ReviewSerializer(reviews, many=True).data})

    @extend_schema(tags=["Catalog Endpoints"], summary="Review a product", request=ReviewSerializer)
    def post(self, request, product_id: int):
        serializer = ReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = create_review(user=request.user, product_id=product_id, **serializer.validated_data)
        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)
