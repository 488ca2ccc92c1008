"""
Insurance Provider Services

Business logic for insurance provider operations.
"""
import logging
from uuid import UUID

from django.db import transaction

from apps.core.authentication import AuthenticatedUser
from apps.core.exceptions import NotFoundError
from apps.core.models import InsuranceProvider

logger = logging.getLogger(__name__)


@transaction.atomic
def create_provider(*, user: AuthenticatedUser, data: dict) -> InsuranceProvider:
    """
    Create a new insurance provider.

    Args:
        user: The acting user
        data: Validated InsuranceProviderSerializer data (name already normalized)

    Returns:
        The created provider
    """
    provider = InsuranceProvider.objects.create(
        **data,
        created_by_id=user.audit_id,
        updated_by_id=user.audit_id,
    )
    logger.info(f'Insurance provider {provider.name} created by {user.id}')
    return provider


@transaction.atomic
def update_provider(*, user: AuthenticatedUser, provider_id: UUID, data: dict) -> InsuranceProvider:
    """
    Update an insurance provider.

    Existing policies keep the rates they were created with.

    Raises:
        NotFoundError: If the provider does not exist or is deleted
    """
    provider = InsuranceProvider.objects.filter(id=provider_id).first()
    if not provider:
        raise NotFoundError('Insurance provider not found')

    for field, value in data.items():
        setattr(provider, field, value)
    provider.updated_by_id = user.audit_id
    provider.save()

    logger.info(f'Insurance provider {provider.id} updated by {user.id}')
    return provider


@transaction.atomic
def delete_provider(*, user: AuthenticatedUser, provider_id: UUID) -> bool:
    """
    Soft delete an insurance provider.

    Returns:
        True if deleted, False if not found
    """
    provider = InsuranceProvider.objects.filter(id=provider_id).first()
    if not provider:
        return False

    provider.soft_delete(user.audit_id)
    logger.info(f'Insurance provider {provider.id} deleted by {user.id}')
    return True
