"""Admin reporting endpoints."""

from common.choices import AnalyticsPeriod
from common.permissions import IsStaff
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import dashboard_stats, sales_analytics


class AdminDashboardView(APIView):
    permission_classes = [IsStaff]
    throttle_scope = "admin"

    @extend_schema(tags=["Admin Endpoints"], summary="Dashboard totals, recent orders and low stock")
    def get(self, request):
        return Response(dashboard_stats())


class AdminAnalyticsView(APIView):
    permission_classes = [IsStaff]
    throttle_scope = "admin"

    @extend_schema(
        tags=["Admin Endpoints"],
        summary="Sales analytics",
        parameters=[
            OpenApiParameter(
                "period", OpenApiTypes.STR, enum=AnalyticsPeriod.values, description="Defaults to 30d"
            )
        ],
    )
    def get(self, request):
        period = request.query_params.get("period") or AnalyticsPeriod.LAST_30_DAYS
        return Response(sales_analytics(period))
