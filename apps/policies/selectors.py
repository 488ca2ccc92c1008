"""
Policy Selectors

Read-side query functions for policies: list, detail, expiring window,
status statistics, rate defaults and the transaction reports shared by the
agent, provider and vehicle class apps.
"""
import logging
from datetime import date, timedelta
from uuid import UUID

from apps.core.constants import POLICY_ORDERING
from apps.core.exceptions import NotFoundError
from apps.core.models import InsuranceProvider, Policy, VehicleClass
from apps.core.serializers import PolicySerializer
from apps.core.utils import paginate_queryset, resolve_ordering
from services.aggregation import summarize
from services.rate_table import default_rates

logger = logging.getLogger(__name__)


def serialize_policies(policies, *, expand: bool = False) -> list[dict]:
    return PolicySerializer(policies, many=True, context={'expand': expand}).data


def filter_policies(
    *,
    today: date,
    search: str | None = None,
    status: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    agent_id: UUID | None = None,
    provider_id: UUID | None = None,
    vehicle_class_id: UUID | None = None,
):
    """
    Build the filtered (non-deleted) policy queryset.

    Status is evaluated as of `today` from end_date, not read from the
    cached column. Dates filter on start_date, both bounds inclusive.
    """
    queryset = Policy.objects.all().search(search).started_between(date_from, date_to)

    if status:
        queryset = queryset.with_current_status(status, today)
    if agent_id:
        queryset = queryset.for_agent(agent_id)
    if provider_id:
        queryset = queryset.for_provider(provider_id)
    if vehicle_class_id:
        queryset = queryset.for_vehicle_class(vehicle_class_id)

    return queryset


def get_policies_paginated(
    *,
    today: date,
    page: int = 1,
    limit: int | None = None,
    order_by: str | None = None,
    order: str | None = None,
    expand: bool = False,
    **filters,
) -> dict:
    """
    Get one page of policies.

    Args:
        today: Reference date for status filtering
        page: Page number (1-indexed)
        limit: Items per page
        order_by: Sort key from POLICY_ORDERING
        order: 'asc' or 'desc'
        expand: Resolve agent / provider / vehicle class references
        **filters: Passed to filter_policies()

    Returns:
        Dictionary with policies list and pagination info
    """
    queryset = filter_policies(today=today, **filters)
    ordering = resolve_ordering(order_by, order, POLICY_ORDERING, '-created_at')
    queryset = queryset.order_by(ordering, '-id')
    if expand:
        queryset = queryset.with_relations()

    policies, pagination = paginate_queryset(
        queryset,
        page=page,
        limit=limit,
        serialize=lambda rows: serialize_policies(rows, expand=expand),
    )
    return {'policies': policies, 'pagination': pagination}


def get_policy_by_id(policy_id: UUID) -> Policy | None:
    """Get a non-deleted policy with its agent, provider and vehicle class loaded."""
    return Policy.objects.with_relations().filter(id=policy_id).first()


def get_expiring_policies(*, today: date, days: int) -> list[dict]:
    """
    Policies ending within `days` days from today, soonest first.

    Both ends of the window are inclusive; already expired policies are excluded.
    """
    policies = (
        Policy.objects
        .ending_between(today, today + timedelta(days=days))
        .with_relations()
        .order_by('end_date', 'policy_number')
    )
    return serialize_policies(policies, expand=True)


def get_policy_statistics(*, today: date) -> dict:
    """Count policies per current status."""
    counts = Policy.objects.all().status_counts(today)
    return {
        'total': counts['total'],
        'active': counts['active'],
        'expiring_soon': counts['expiring_soon'],
        'expired': counts['expired'],
    }


def get_rate_defaults(*, provider_id: UUID | None = None, vehicle_class_id: UUID | None = None) -> dict:
    """
    Look up the default rates for a provider / vehicle class pair.

    Raises:
        NotFoundError: If a given id does not match a non-deleted record
    """
    provider = None
    vehicle_class = None

    if provider_id:
        provider = InsuranceProvider.objects.filter(id=provider_id).first()
        if not provider:
            raise NotFoundError('Insurance provider not found')

    if vehicle_class_id:
        vehicle_class = VehicleClass.objects.filter(id=vehicle_class_id).first()
        if not vehicle_class:
            raise NotFoundError('Vehicle class not found')

    return default_rates(provider, vehicle_class).as_dict()


def get_policy_transactions(queryset) -> dict:
    """
    Transaction report over a filtered policy queryset.

    Returns:
        {
            "transactions": [...policies, newest start date first],
            "summary": {...field-wise totals of the stored derived amounts},
            "count": int
        }
    """
    policies = list(queryset.with_relations().order_by('-start_date', '-created_at'))
    summary = summarize(policies)
    return {
        'transactions': serialize_policies(policies, expand=True),
        'summary': summary.as_dict(),
        'count': len(policies),
    }
