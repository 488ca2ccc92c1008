"""
Policies API Views

Endpoints:
- GET /api/policies - List policies (search, filters, pagination)
- POST /api/policies - Create a policy
- GET /api/policies/{id} - Get policy details
- PATCH /api/policies/{id} - Update a policy (recalculates)
- DELETE /api/policies/{id} - Soft delete a policy
- GET /api/policies/expiring - Policies ending within N days
- GET /api/policies/statistics - Counts per current status
- GET /api/policies/rate-defaults - Default rates for a provider / vehicle class
- POST /api/policies/calculate - Calculation preview (nothing saved)
- POST /api/policies/refresh-statuses - Re-derive cached statuses (cron)
"""
import logging

from django.conf import settings
from django.utils import timezone
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.authentication import CronSecretAuthentication, JWTAuthentication
from apps.core.exceptions import ValidationError
from apps.core.mixins import AuthenticatedAPIView, handle_api_errors
from apps.core.permissions import IsActiveUser, IsAdmin, IsAuthenticated
from apps.core.serializers import CalculationSerializer, PolicySerializer, PolicyWriteSerializer
from services.policy_status import POLICY_STATUSES

from .selectors import (
    get_expiring_policies,
    get_policies_paginated,
    get_policy_by_id,
    get_policy_statistics,
    get_rate_defaults,
)
from .services import calculate_preview, create_policy, delete_policy, refresh_policy_statuses, update_policy

logger = logging.getLogger(__name__)


class PoliciesListCreateView(AuthenticatedAPIView, APIView):
    """GET/POST /api/policies - List policies or create a new policy."""

    permission_classes = [IsAuthenticated, IsActiveUser]

    @handle_api_errors
    def get(self, request):
        """
        Query params:
            search, status, startDate, endDate, agentId, providerId,
            vehicleClassId, page, limit, orderBy, order, expand
        """
        params = request.query_params

        status_filter = params.get('status') or None
        if status_filter and status_filter not in POLICY_STATUSES:
            raise ValidationError(f"Invalid status. Expected one of: {', '.join(POLICY_STATUSES)}")

        result = get_policies_paginated(
            today=timezone.localdate(),
            page=self.parse_int(params.get('page'), 'page', 1),
            limit=self.parse_int(params.get('limit'), 'limit', 0) or None,
            order_by=params.get('orderBy'),
            order=params.get('order'),
            expand=self.parse_bool(params.get('expand')),
            search=params.get('search'),
            status=status_filter,
            date_from=self.parse_date(params.get('startDate'), 'startDate'),
            date_to=self.parse_date(params.get('endDate'), 'endDate'),
            agent_id=self.parse_uuid_optional(params.get('agentId'), 'agentId'),
            provider_id=self.parse_uuid_optional(params.get('providerId'), 'providerId'),
            vehicle_class_id=self.parse_uuid_optional(params.get('vehicleClassId'), 'vehicleClassId'),
        )
        return Response(result)

    @handle_api_errors
    def post(self, request):
        user = self.get_user(request)

        serializer = PolicyWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        policy = create_policy(user=user, data=serializer.validated_data)
        return Response(
            PolicySerializer(policy, context={'expand': True}).data,
            status=status.HTTP_201_CREATED,
        )


class PolicyDetailView(AuthenticatedAPIView, APIView):
    """GET/PATCH/DELETE /api/policies/{id} - Policy CRUD operations."""

    permission_classes = [IsAuthenticated, IsActiveUser]

    @handle_api_errors
    def get(self, request, policy_id):
        policy = get_policy_by_id(self.parse_uuid(policy_id, 'policy_id'))
        if not policy:
            return Response(
                {'error': 'Policy not found'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(PolicySerializer(policy, context={'expand': True}).data)

    @handle_api_errors
    def patch(self, request, policy_id):
        user = self.get_user(request)
        policy_uuid = self.parse_uuid(policy_id, 'policy_id')

        instance = get_policy_by_id(policy_uuid)
        if not instance:
            return Response(
                {'error': 'Policy not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        serializer = PolicyWriteSerializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        policy = update_policy(user=user, policy_id=policy_uuid, data=serializer.validated_data)
        return Response(PolicySerializer(policy, context={'expand': True}).data)

    @handle_api_errors
    def delete(self, request, policy_id):
        user = self.get_user(request)

        deleted = delete_policy(user=user, policy_id=self.parse_uuid(policy_id, 'policy_id'))
        if not deleted:
            return Response(
                {'error': 'Policy not found'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response({'success': True})


class ExpiringPoliciesView(AuthenticatedAPIView, APIView):
    """
    GET /api/policies/expiring?days=30

    Policies whose end date is between today and today + days (inclusive).
    """

    permission_classes = [IsAuthenticated, IsActiveUser]

    @handle_api_errors
    def get(self, request):
        days = self.parse_int(request.query_params.get('days'), 'days', settings.POLICY_EXPIRING_SOON_DAYS)
        today = timezone.localdate()

        policies = get_expiring_policies(today=today, days=days)
        return Response({'policies': policies, 'days': days, 'count': len(policies)})


class PolicyStatisticsView(AuthenticatedAPIView, APIView):
    """
    GET /api/policies/statistics

    Response (200):
        {"total": 10, "active": 6, "expiring_soon": 3, "expired": 1}
    """

    permission_classes = [IsAuthenticated, IsActiveUser]

    def get(self, request):
        return Response(get_policy_statistics(today=timezone.localdate()))


class RateDefaultsView(AuthenticatedAPIView, APIView):
    """
    GET /api/policies/rate-defaults?providerId=...&vehicleClassId=...

    Response (200):
        {"agent_rate": 5.0, "our_rate": 3.0, "tds_rate": 10.0, "gst_rate": 18.0}
    Rates of an omitted side are null.
    """

    permission_classes = [IsAuthenticated, IsActiveUser]

    @handle_api_errors
    def get(self, request):
        params = request.query_params
        return Response(get_rate_defaults(
            provider_id=self.parse_uuid_optional(params.get('providerId'), 'providerId'),
            vehicle_class_id=self.parse_uuid_optional(params.get('vehicleClassId'), 'vehicleClassId'),
        ))


class CalculatePolicyView(AuthenticatedAPIView, APIView):
    """POST /api/policies/calculate - Calculation preview, nothing is saved."""

    permission_classes = [IsAuthenticated, IsActiveUser]

    @handle_api_errors
    def post(self, request):
        serializer = CalculationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return Response(calculate_preview(**serializer.validated_data))


class RefreshPolicyStatusesView(AuthenticatedAPIView, APIView):
    """
    POST /api/policies/refresh-statuses

    Re-derives the cached status column. Called daily by the scheduler with
    X-Cron-Secret, or manually by an admin.
    """
    authentication_classes = [CronSecretAuthentication, JWTAuthentication]
    permission_classes = [IsActiveUser, IsAdmin]

    def post(self, request):
        return Response(refresh_policy_statuses(today=timezone.localdate()))
