"""
Dashboard API Views

- GET /api/dashboard - Global policy, agent and revenue statistics
"""
import logging

from django.utils import timezone
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.mixins import AuthenticatedAPIView, handle_api_errors
from apps.core.permissions import IsActiveUser, IsAuthenticated

from .services import get_dashboard_summary

logger = logging.getLogger(__name__)


class DashboardSummaryView(AuthenticatedAPIView, APIView):
    """
    GET /api/dashboard

    Query params:
        as_of_date: Optional date (YYYY-MM-DD) for status counts (default: today)

    Response (200):
        {
            "total_policies": 42,
            "active_policies": 30,
            "expiring_policies": 8,
            "expired_policies": 4,
            "total_agents": 12,
            "total_revenue": 123456.78,
            "total_commissions": 45678.9,
            "recent_policies": [...]
        }
    """
    permission_classes = [IsAuthenticated, IsActiveUser]

    @handle_api_errors
    def get(self, request):
        as_of_date = self.parse_date(request.query_params.get('as_of_date'), 'as_of_date')
        return Response(get_dashboard_summary(as_of_date or timezone.localdate()))
