"""
Vehicle Class Selectors

Query functions for vehicle class data following the selector pattern.
"""
from datetime import date
from uuid import UUID

from apps.core.constants import VEHICLE_CLASS_ORDERING
from apps.core.models import Policy, VehicleClass
from apps.core.serializers import VehicleClassMinimalSerializer, VehicleClassSerializer
from apps.core.utils import paginate_queryset, resolve_ordering
from apps.policies.selectors import get_policy_transactions


def get_vehicle_classes_paginated(
    *,
    search: str | None = None,
    page: int = 1,
    limit: int | None = None,
    order_by: str | None = None,
    order: str | None = None,
) -> dict:
    """
    Get one page of vehicle classes, searched by name.

    Returns:
        Dictionary with vehicle_classes list and pagination info
    """
    ordering = resolve_ordering(order_by, order, VEHICLE_CLASS_ORDERING, 'name')
    queryset = VehicleClass.objects.search(search, ('name',)).order_by(ordering, 'id')

    vehicle_classes, pagination = paginate_queryset(
        queryset,
        page=page,
        limit=limit,
        serialize=lambda rows: VehicleClassSerializer(rows, many=True).data,
    )
    return {'vehicle_classes': vehicle_classes, 'pagination': pagination}


def get_active_vehicle_classes() -> list[dict]:
    """Active vehicle classes for dropdowns, ordered by name."""
    vehicle_classes = VehicleClass.objects.active().order_by('name')
    return VehicleClassMinimalSerializer(vehicle_classes, many=True).data


def get_vehicle_class_by_id(vehicle_class_id: UUID) -> VehicleClass | None:
    return VehicleClass.objects.filter(id=vehicle_class_id).first()


def get_vehicle_class_transactions(
    vehicle_class: VehicleClass,
    *,
    date_from: date | None = None,
    date_to: date | None = None,
) -> dict:
    """
    Policies of one vehicle class with summed amounts.

    The date range (on policy start date) applies only when both ends are given.
    """
    queryset = Policy.objects.for_vehicle_class(vehicle_class.id)
    if date_from and date_to:
        queryset = queryset.started_between(date_from, date_to)

    report = get_policy_transactions(queryset)
    report['vehicle_class'] = VehicleClassMinimalSerializer(vehicle_class).data
    return report
