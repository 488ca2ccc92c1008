"""
Vehicle Classes API Views

Endpoints:
- GET /api/vehicle-classes - List vehicle classes (search, pagination)
- POST /api/vehicle-classes - Create a vehicle class
- GET /api/vehicle-classes/active - Active vehicle classes for dropdowns
- GET/PATCH/DELETE /api/vehicle-classes/{id} - Vehicle class CRUD
- GET /api/vehicle-classes/{id}/transactions - Vehicle class transaction report
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.mixins import AuthenticatedAPIView, handle_api_errors
from apps.core.permissions import IsActiveUser, IsAuthenticated
from apps.core.serializers import VehicleClassSerializer

from .selectors import (
    get_active_vehicle_classes,
    get_vehicle_class_by_id,
    get_vehicle_class_transactions,
    get_vehicle_classes_paginated,
)
from .services import create_vehicle_class, delete_vehicle_class, update_vehicle_class

logger = logging.getLogger(__name__)


class VehicleClassesListCreateView(AuthenticatedAPIView, APIView):
    """GET/POST /api/vehicle-classes"""

    permission_classes = [IsAuthenticated, IsActiveUser]

    @handle_api_errors
    def get(self, request):
        params = request.query_params
        result = get_vehicle_classes_paginated(
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

        serializer = VehicleClassSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        vehicle_class = create_vehicle_class(user=user, data=serializer.validated_data)
        return Response(VehicleClassSerializer(vehicle_class).data, status=status.HTTP_201_CREATED)


class ActiveVehicleClassesView(APIView):
    """
    GET /api/vehicle-classes/active

    Response (200):
        [{"id": "uuid", "name": "two wheeler", "agent_rate": 5.0, "our_rate": 3.0}]
    """

    permission_classes = [IsAuthenticated, IsActiveUser]

    def get(self, request):
        return Response(get_active_vehicle_classes())


class VehicleClassDetailView(AuthenticatedAPIView, APIView):
    """GET/PATCH/DELETE /api/vehicle-classes/{id}"""

    permission_classes = [IsAuthenticated, IsActiveUser]

    @handle_api_errors
    def get(self, request, vehicle_class_id):
        vehicle_class = get_vehicle_class_by_id(self.parse_uuid(vehicle_class_id, 'vehicle_class_id'))
        if not vehicle_class:
            return Response(
                {'error': 'Vehicle class not found'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(VehicleClassSerializer(vehicle_class).data)

    @handle_api_errors
    def patch(self, request, vehicle_class_id):
        user = self.get_user(request)
        vehicle_class_uuid = self.parse_uuid(vehicle_class_id, 'vehicle_class_id')

        instance = get_vehicle_class_by_id(vehicle_class_uuid)
        if not instance:
            return Response(
                {'error': 'Vehicle class not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        serializer = VehicleClassSerializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        vehicle_class = update_vehicle_class(
            user=user,
            vehicle_class_id=vehicle_class_uuid,
            data=serializer.validated_data,
        )
        return Response(VehicleClassSerializer(vehicle_class).data)

    @handle_api_errors
    def delete(self, request, vehicle_class_id):
        user = self.get_user(request)

        deleted = delete_vehicle_class(
            user=user,
            vehicle_class_id=self.parse_uuid(vehicle_class_id, 'vehicle_class_id'),
        )
        if not deleted:
            return Response(
                {'error': 'Vehicle class not found'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response({'success': True})


class VehicleClassTransactionsView(AuthenticatedAPIView, APIView):
    """
    GET /api/vehicle-classes/{id}/transactions?startDate=YYYY-MM-DD&endDate=YYYY-MM-DD

    Same report shape as the provider transactions, keyed by "vehicle_class".
    """

    permission_classes = [IsAuthenticated, IsActiveUser]

    @handle_api_errors
    def get(self, request, vehicle_class_id):
        vehicle_class = get_vehicle_class_by_id(self.parse_uuid(vehicle_class_id, 'vehicle_class_id'))
        if not vehicle_class:
            return Response(
                {'error': 'Vehicle class not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        report = get_vehicle_class_transactions(
            vehicle_class,
            date_from=self.parse_date(request.query_params.get('startDate'), 'startDate'),
            date_to=self.parse_date(request.query_params.get('endDate'), 'endDate'),
        )
        return Response(report)
