"""
Users API Views

Endpoints:
- GET /api/users/me - Current user's profile
- GET /api/users - List users (admin)
- POST /api/users - Create a user (admin)
- GET/PATCH/DELETE /api/users/{id} - User CRUD (admin)
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.exceptions import ValidationError
from apps.core.mixins import AuthenticatedAPIView, handle_api_errors
from apps.core.models import User
from apps.core.permissions import IsActiveUser, IsAdmin, IsAuthenticated
from apps.core.serializers import UserSerializer, UserWriteSerializer

from .selectors import get_user_by_id, get_users_paginated
from .services import create_user, delete_user, update_user

logger = logging.getLogger(__name__)

USER_ROLES = [choice for choice, _ in User.ROLE_CHOICES]


class CurrentUserView(AuthenticatedAPIView, APIView):
    """
    GET /api/users/me

    Response (200):
        {"id": "uuid", "name": "...", "username": "...", "email": "...", "role": "admin", ...}
    """

    permission_classes = [IsAuthenticated]

    @handle_api_errors
    def get(self, request):
        user = self.get_user(request)

        profile = get_user_by_id(user.id)
        if not profile:
            return Response(
                {'error': 'User not found'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(UserSerializer(profile).data)


class UsersListCreateView(AuthenticatedAPIView, APIView):
    """GET/POST /api/users - admin only."""

    permission_classes = [IsAuthenticated, IsActiveUser, IsAdmin]

    @handle_api_errors
    def get(self, request):
        params = request.query_params

        role = params.get('role') or None
        if role and role not in USER_ROLES:
            raise ValidationError(f"Invalid role. Expected one of: {', '.join(USER_ROLES)}")

        result = get_users_paginated(
            search=params.get('search'),
            role=role,
            page=self.parse_int(params.get('page'), 'page', 1),
            limit=self.parse_int(params.get('limit'), 'limit', 0) or None,
            order_by=params.get('orderBy'),
            order=params.get('order'),
        )
        return Response(result)

    @handle_api_errors
    def post(self, request):
        user = self.get_user(request)

        serializer = UserWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        created = create_user(user=user, data=serializer.validated_data)
        return Response(UserSerializer(created).data, status=status.HTTP_201_CREATED)


class UserDetailView(AuthenticatedAPIView, APIView):
    """GET/PATCH/DELETE /api/users/{id} - admin only."""

    permission_classes = [IsAuthenticated, IsActiveUser, IsAdmin]

    @handle_api_errors
    def get(self, request, user_id):
        target = get_user_by_id(self.parse_uuid(user_id, 'user_id'))
        if not target:
            return Response(
                {'error': 'User not found'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(UserSerializer(target).data)

    @handle_api_errors
    def patch(self, request, user_id):
        user = self.get_user(request)
        user_uuid = self.parse_uuid(user_id, 'user_id')

        instance = get_user_by_id(user_uuid)
        if not instance:
            return Response(
                {'error': 'User not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        serializer = UserWriteSerializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        updated = update_user(user=user, user_id=user_uuid, data=serializer.validated_data)
        return Response(UserSerializer(updated).data)

    @handle_api_errors
    def delete(self, request, user_id):
        user = self.get_user(request)

        deleted = delete_user(user=user, user_id=self.parse_uuid(user_id, 'user_id'))
        if not deleted:
            return Response(
                {'error': 'User not found'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response({'success': True})
