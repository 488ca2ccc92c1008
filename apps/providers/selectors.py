"""
Insurance Provider Selectors

Query functions for insurance provider data following the selector pattern.
"""
from datetime import date
from uuid import UUID

from apps.core.constants import PROVIDER_ORDERING
from apps.core.models import InsuranceProvider, Policy
from apps.core.serializers import InsuranceProviderMinimalSerializer, InsuranceProviderSerializer
from apps.core.utils import paginate_queryset, resolve_ordering
from apps.policies.selectors import get_policy_transactions


def get_providers_paginated(
    *,
    search: str | None = None,
    page: int = 1,
    limit: int | None = None,
    order_by: str | None = None,
    order: str | None = None,
) -> dict:
    """
    Get one page of insurance providers, searched by name.

    Returns:
        Dictionary with providers list and pagination info
    """
    ordering = resolve_ordering(order_by, order, PROVIDER_ORDERING, 'name')
    queryset = InsuranceProvider.objects.search(search, ('name',)).order_by(ordering, 'id')

    providers, pagination = paginate_queryset(
        queryset,
        page=page,
        limit=limit,
        serialize=lambda rows: InsuranceProviderSerializer(rows, many=True).data,
    )
    return {'providers': providers, 'pagination': pagination}


def get_active_providers() -> list[dict]:
    """Active providers for dropdowns, ordered by name."""
    providers = InsuranceProvider.objects.active().order_by('name')
    return InsuranceProviderMinimalSerializer(providers, many=True).data


def get_provider_by_id(provider_id: UUID) -> InsuranceProvider | None:
    return InsuranceProvider.objects.filter(id=provider_id).first()


def get_provider_transactions(
    provider: InsuranceProvider,
    *,
    date_from: date | None = None,
    date_to: date | None = None,
) -> dict:
    """
    Policies of one provider with summed amounts.

    The date range (on policy start date) applies only when both ends are given.
    """
    queryset = Policy.objects.for_provider(provider.id)
    if date_from and date_to:
        queryset = queryset.started_between(date_from, date_to)

    report = get_policy_transactions(queryset)
    report['provider'] = InsuranceProviderMinimalSerializer(provider).data
    return report
