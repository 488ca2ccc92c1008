"""
User Services

Business logic for back-office user management. Identities are created in
the identity provider; here a user row is linked to it through auth_uid.
"""
import logging
from uuid import UUID

from django.db import transaction

from apps.core.authentication import AuthenticatedUser
from apps.core.exceptions import ConflictError, NotFoundError
from apps.core.models import User

logger = logging.getLogger(__name__)


@transaction.atomic
def create_user(*, user: AuthenticatedUser, data: dict) -> User:
    """Create a user from validated UserWriteSerializer data."""
    created = User.objects.create(
        **data,
        created_by_id=user.audit_id,
        updated_by_id=user.audit_id,
    )
    logger.info(f'User {created.username} ({created.role}) created by {user.id}')
    return created


@transaction.atomic
def update_user(*, user: AuthenticatedUser, user_id: UUID, data: dict) -> User:
    """
    Update a user.

    Raises:
        NotFoundError: If the user does not exist or is deleted
        ConflictError: If an admin tries to demote or deactivate themselves
    """
    target = User.objects.filter(id=user_id).first()
    if not target:
        raise NotFoundError('User not found')

    if target.id == user.id:
        if data.get('role', target.role) != User.ROLE_ADMIN or data.get('is_active', True) is False:
            raise ConflictError('You cannot demote or deactivate your own account')

    for field, value in data.items():
        setattr(target, field, value)
    target.updated_by_id = user.audit_id
    target.save()

    logger.info(f'User {target.id} updated by {user.id}')
    return target


@transaction.atomic
def delete_user(*, user: AuthenticatedUser, user_id: UUID) -> bool:
    """
    Soft delete a user.

    Returns:
        True if deleted, False if not found

    Raises:
        ConflictError: If a user tries to delete their own account
    """
    target = User.objects.filter(id=user_id).first()
    if not target:
        return False

    if target.id == user.id:
        raise ConflictError('You cannot delete your own account')

    target.soft_delete(user.audit_id)
    logger.info(f'User {target.id} deleted by {user.id}')
    return True
