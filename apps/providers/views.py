"""
Insurance Providers API Views

Endpoints:
- GET /api/insurance-providers - List providers (search, pagination)
- POST /api/insurance-providers - Create a provider
- GET /api/insurance-providers/active - Active providers for dropdowns
- GET/PATCH/DELETE /api/insurance-providers/{id} - Provider CRUD
- GET /api/insurance-providers/{id}/transactions - Provider transaction report
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.mixins import AuthenticatedAPIView, handle_api_errors
from apps.core.permissions import IsActiveUser, IsAuthenticated
from apps.core.serializers import InsuranceProviderSerializer

from .selectors import get_active_providers, get_provider_by_id, get_provider_transactions, get_providers_paginated
from .services import create_provider, delete_provider, update_provider

logger = logging.getLogger(__name__)


class ProvidersListCreateView(AuthenticatedAPIView, APIView):
    """
    GET /api/insurance-providers?search=&page=&limit=&orderBy=&order=

    Response (200):
        {
            "providers": [{"id": "uuid", "name": "acme", "tds": 10.0, ...}],
            "pagination": {"currentPage": 1, "totalPages": 1, ...}
        }

    POST /api/insurance-providers
    """

    permission_classes = [IsAuthenticated, IsActiveUser]

    @handle_api_errors
    def get(self, request):
        params = request.query_params
        result = get_providers_paginated(
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

        serializer = InsuranceProviderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        provider = create_provider(user=user, data=serializer.validated_data)
        return Response(InsuranceProviderSerializer(provider).data, status=status.HTTP_201_CREATED)


class ActiveProvidersView(APIView):
    """
    GET /api/insurance-providers/active

    Response (200):
        [{"id": "uuid", "name": "acme", "tds": 10.0, "gst": 18.0}]
    """

    permission_classes = [IsAuthenticated, IsActiveUser]

    def get(self, request):
        return Response(get_active_providers())


class ProviderDetailView(AuthenticatedAPIView, APIView):
    """GET/PATCH/DELETE /api/insurance-providers/{id}"""

    permission_classes = [IsAuthenticated, IsActiveUser]

    @handle_api_errors
    def get(self, request, provider_id):
        provider = get_provider_by_id(self.parse_uuid(provider_id, 'provider_id'))
        if not provider:
            return Response(
                {'error': 'Insurance provider not found'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(InsuranceProviderSerializer(provider).data)

    @handle_api_errors
    def patch(self, request, provider_id):
        user = self.get_user(request)
        provider_uuid = self.parse_uuid(provider_id, 'provider_id')

        instance = get_provider_by_id(provider_uuid)
        if not instance:
            return Response(
                {'error': 'Insurance provider not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        serializer = InsuranceProviderSerializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        provider = update_provider(user=user, provider_id=provider_uuid, data=serializer.validated_data)
        return Response(InsuranceProviderSerializer(provider).data)

    @handle_api_errors
    def delete(self, request, provider_id):
        user = self.get_user(request)

        deleted = delete_provider(user=user, provider_id=self.parse_uuid(provider_id, 'provider_id'))
        if not deleted:
            return Response(
                {'error': 'Insurance provider not found'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response({'success': True})


class ProviderTransactionsView(AuthenticatedAPIView, APIView):
    """
    GET /api/insurance-providers/{id}/transactions?startDate=YYYY-MM-DD&endDate=YYYY-MM-DD

    Response (200):
        {
            "provider": {...},
            "transactions": [...],
            "summary": {"premium_amount": ..., "our_profit": ..., ...},
            "count": 3
        }
    """

    permission_classes = [IsAuthenticated, IsActiveUser]

    @handle_api_errors
    def get(self, request, provider_id):
        provider = get_provider_by_id(self.parse_uuid(provider_id, 'provider_id'))
        if not provider:
            return Response(
                {'error': 'Insurance provider not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        report = get_provider_transactions(
            provider,
            date_from=self.parse_date(request.query_params.get('startDate'), 'startDate'),
            date_to=self.parse_date(request.query_params.get('endDate'), 'endDate'),
        )
        return Response(report)
