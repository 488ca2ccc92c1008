"""
Vehicle Class Services

Business logic for vehicle class operations.
"""
import logging
from uuid import UUID

from django.db import transaction

from apps.core.authentication import AuthenticatedUser
from apps.core.exceptions import NotFoundError
from apps.core.models import VehicleClass

logger = logging.getLogger(__name__)


@transaction.atomic
def create_vehicle_class(*, user: AuthenticatedUser, data: dict) -> VehicleClass:
    """Create a new vehicle class from validated VehicleClassSerializer data."""
    vehicle_class = VehicleClass.objects.create(
        **data,
        created_by_id=user.audit_id,
        updated_by_id=user.audit_id,
    )
    logger.info(f'Vehicle class {vehicle_class.name} created by {user.id}')
    return vehicle_class


@transaction.atomic
def update_vehicle_class(*, user: AuthenticatedUser, vehicle_class_id: UUID, data: dict) -> VehicleClass:
    """
    Update a vehicle class. Existing policies keep their snapshotted rates.

    Raises:
        NotFoundError: If the vehicle class does not exist or is deleted
    """
    vehicle_class = VehicleClass.objects.filter(id=vehicle_class_id).first()
    if not vehicle_class:
        raise NotFoundError('Vehicle class not found')

    for field, value in data.items():
        setattr(vehicle_class, field, value)
    vehicle_class.updated_by_id = user.audit_id
    vehicle_class.save()

    logger.info(f'Vehicle class {vehicle_class.id} updated by {user.id}')
    return vehicle_class


@transaction.atomic
def delete_vehicle_class(*, user: AuthenticatedUser, vehicle_class_id: UUID) -> bool:
    """Soft delete a vehicle class. Returns False if not found."""
    vehicle_class = VehicleClass.objects.filter(id=vehicle_class_id).first()
    if not vehicle_class:
        return False

    vehicle_class.soft_delete(user.audit_id)
    logger.info(f'Vehicle class {vehicle_class.id} deleted by {user.id}')
    return True
