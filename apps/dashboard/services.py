"""
Dashboard Services

Global statistics for the dashboard. Money totals are sums of the amounts
stored on each non-deleted policy.
"""
import logging
from datetime import date

from apps.core.constants import RECENT_POLICIES_LIMIT
from apps.core.models import Agent, InsuranceProvider, Policy, VehicleClass
from apps.policies.selectors import serialize_policies
from services.aggregation import SUMMARY_FIELDS, summarize

logger = logging.getLogger(__name__)


def get_dashboard_summary(as_of_date: date) -> dict:
    """
    Build the dashboard payload.

    Args:
        as_of_date: Date the policy statuses are evaluated at

    Returns:
        {
            "total_policies": int,
            "active_policies": int,
            "expiring_policies": int,
            "expired_policies": int,
            "total_agents": int,
            "total_providers": int,
            "total_vehicle_classes": int,
            "total_revenue": sum of our_profit,
            "total_commissions": sum of agent_commission,
            "totals": {...every summed field},
            "recent_policies": [...]
        }
    """
    policies = Policy.objects.all()
    counts = policies.status_counts(as_of_date)
    totals = summarize(policies.values(*SUMMARY_FIELDS).iterator())

    recent = policies.with_relations().order_by('-created_at')[:RECENT_POLICIES_LIMIT]

    summary = {
        'as_of_date': as_of_date.isoformat(),
        'total_policies': counts['total'],
        'active_policies': counts['active'],
        'expiring_policies': counts['expiring_soon'],
        'expired_policies': counts['expired'],
        'total_agents': Agent.objects.count(),
        'total_providers': InsuranceProvider.objects.count(),
        'total_vehicle_classes': VehicleClass.objects.count(),
        'total_revenue': totals.our_profit,
        'total_commissions': totals.agent_commission,
        'totals': totals.as_dict(),
        'recent_policies': serialize_policies(recent, expand=True),
    }

    logger.debug(f"Dashboard summary built as of {as_of_date}: {counts['total']} policies")
    return summary
