"""
User Selectors

Query functions for back-office users.
"""
from uuid import UUID

from apps.core.constants import USER_ORDERING
from apps.core.models import User
from apps.core.serializers import UserSerializer
from apps.core.utils import paginate_queryset, resolve_ordering

USER_SEARCH_FIELDS = ('name', 'username', 'email', 'phone_number')


def get_users_paginated(
    *,
    search: str | None = None,
    role: str | None = None,
    page: int = 1,
    limit: int | None = None,
    order_by: str | None = None,
    order: str | None = None,
) -> dict:
    """
    Get one page of users.

    Returns:
        Dictionary with users list and pagination info
    """
    ordering = resolve_ordering(order_by, order, USER_ORDERING, '-created_at')
    queryset = User.objects.search(search, USER_SEARCH_FIELDS)
    if role:
        queryset = queryset.filter(role=role)
    queryset = queryset.order_by(ordering, 'id')

    users, pagination = paginate_queryset(
        queryset,
        page=page,
        limit=limit,
        serialize=lambda rows: UserSerializer(rows, many=True).data,
    )
    return {'users': users, 'pagination': pagination}


def get_user_by_id(user_id: UUID) -> User | None:
    return User.objects.filter(id=user_id).first()
