"""Admin reporting routes, mounted at /api/v1/admin/."""

from django.urls import path

from .views import AdminAnalyticsView, AdminDashboardView

urlpatterns = [
    path("dashboard/", AdminDashboardView.as_view(), name="admin-dashboard"),
    path("analytics/", AdminAnalyticsView.as_view(), name="admin-analytics"),
]
