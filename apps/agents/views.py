"""
Agents API Views

Endpoints:
- GET /api/agents - List agents (search, pagination)
- POST /api/agents - Create an agent
- GET /api/agents/active - Active agents for dropdowns
- GET/PATCH/DELETE /api/agents/{id} - Agent CRUD
- GET /api/agents/{id}/transactions - Agent commission report for a date range
- GET /api/agents/{id}/commission-summary - Lifetime commission totals
"""
import logging

from django.utils import timezone
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.exceptions import ValidationError
from apps.core.mixins import AuthenticatedAPIView, handle_api_errors
from apps.core.permissions import IsActiveUser, IsAuthenticated
from apps.core.serializers import AgentSerializer

from .selectors import (
    get_active_agents,
    get_agent_by_id,
    get_agent_commission_summary,
    get_agent_transactions,
    get_agents_paginated,
)
from .services import create_agent, delete_agent, update_agent

logger = logging.getLogger(__name__)


class AgentsListCreateView(AuthenticatedAPIView, APIView):
    """
    GET /api/agents?search=&page=&limit=&orderBy=&order=

    Response (200):
        {
            "agents": [
                {
                    "id": "uuid",
                    "name": "Agent Name",
                    "phone_number": "9876543210",
                    "email": "agent@example.com",
                    "location": {"address": "...", "city": "...", "state": "..."},
                    "is_active": true
                }
            ],
            "pagination": {...}
        }

    POST /api/agents
    """

    permission_classes = [IsAuthenticated, IsActiveUser]

    @handle_api_errors
    def get(self, request):
        params = request.query_params
        result = get_agents_paginated(
            search=params.get('search'),
            page=self.parse_int(params.get('page'), 'page', 1),
            limit=self.parse_int(params.get('limit'), 'limit', 0) or None,
            order_by=params.get('orderBy'),
            order=params.get('order'),
        )
        return Response(result)

    @handle_api_errors
    def post(self, request):
        user = self.get_user(request)

        serializer = AgentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        agent = create_agent(user=user, data=serializer.validated_data)
        return Response(AgentSerializer(agent).data, status=status.HTTP_201_CREATED)


class ActiveAgentsView(APIView):
    """
    GET /api/agents/active

    Response (200):
        [{"id": "uuid", "name": "Agent Name", "phone_number": "9876543210"}]
    """

    permission_classes = [IsAuthenticated, IsActiveUser]

    def get(self, request):
        return Response(get_active_agents())


class AgentDetailView(AuthenticatedAPIView, APIView):
    """GET/PATCH/DELETE /api/agents/{id}"""

    permission_classes = [IsAuthenticated, IsActiveUser]

    @handle_api_errors
    def get(self, request, agent_id):
        agent = get_agent_by_id(self.parse_uuid(agent_id, 'agent_id'))
        if not agent:
            return Response(
                {'error': 'Agent not found'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(AgentSerializer(agent).data)

    @handle_api_errors
    def patch(self, request, agent_id):
        user = self.get_user(request)
        agent_uuid = self.parse_uuid(agent_id, 'agent_id')

        instance = get_agent_by_id(agent_uuid)
        if not instance:
            return Response(
                {'error': 'Agent not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        serializer = AgentSerializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        agent = update_agent(user=user, agent_id=agent_uuid, data=serializer.validated_data)
        return Response(AgentSerializer(agent).data)

    @handle_api_errors
    def delete(self, request, agent_id):
        user = self.get_user(request)

        deleted = delete_agent(user=user, agent_id=self.parse_uuid(agent_id, 'agent_id'))
        if not deleted:
            return Response(
                {'error': 'Agent not found'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response({'success': True})


class AgentTransactionsView(AuthenticatedAPIView, APIView):
    """
    GET /api/agents/{id}/transactions?startDate=YYYY-MM-DD&endDate=YYYY-MM-DD

    startDate is required; endDate defaults to today. Policies are matched
    on their start date, both bounds inclusive.

    Response (200):
        {
            "agent": {...},
            "start_date": "2024-01-01",
            "end_date": "2024-03-31",
            "transactions": [...],
            "summary": {"agent_commission": ..., "premium_amount": ..., ...},
            "count": 3
        }
    """

    permission_classes = [IsAuthenticated, IsActiveUser]

    @handle_api_errors
    def get(self, request, agent_id):
        agent = get_agent_by_id(self.parse_uuid(agent_id, 'agent_id'))
        if not agent:
            return Response(
                {'error': 'Agent not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        date_from = self.parse_date(request.query_params.get('startDate'), 'startDate')
        if not date_from:
            raise ValidationError('startDate is required')
        date_to = self.parse_date(request.query_params.get('endDate'), 'endDate') or timezone.localdate()
        if date_from > date_to:
            raise ValidationError('Start date must not be after end date')

        return Response(get_agent_transactions(agent, date_from=date_from, date_to=date_to))


class AgentCommissionSummaryView(AuthenticatedAPIView, APIView):
    """GET /api/agents/{id}/commission-summary"""

    permission_classes = [IsAuthenticated, IsActiveUser]

    @handle_api_errors
    def get(self, request, agent_id):
        agent = get_agent_by_id(self.parse_uuid(agent_id, 'agent_id'))
        if not agent:
            return Response(
                {'error': 'Agent not found'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(get_agent_commission_summary(agent))
