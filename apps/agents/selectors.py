"""
Agent Selectors

Query functions for agent data following the selector pattern.

Commission figures are always sums of the amounts stored on each policy
at write time; nothing here recalculates a commission.
"""
from datetime import date
from uuid import UUID

from apps.core.constants import AGENT_ORDERING
from apps.core.models import Agent, Policy
from apps.core.serializers import AgentMinimalSerializer, AgentSerializer
from apps.core.utils import paginate_queryset, resolve_ordering
from apps.policies.selectors import get_policy_transactions
from services.aggregation import summarize

AGENT_SEARCH_FIELDS = ('name', 'phone_number', 'email', 'city', 'state')


def get_agents_paginated(
    *,
    search: str | None = None,
    page: int = 1,
    limit: int | None = None,
    order_by: str | None = None,
    order: str | None = None,
) -> dict:
    """
    Get one page of agents.

    Search matches name, phone, email, city or state (case-insensitive).

    Returns:
        Dictionary with agents list and pagination info
    """
    ordering = resolve_ordering(order_by, order, AGENT_ORDERING, '-created_at')
    queryset = Agent.objects.search(search, AGENT_SEARCH_FIELDS).order_by(ordering, 'id')

    agents, pagination = paginate_queryset(
        queryset,
        page=page,
        limit=limit,
        serialize=lambda rows: AgentSerializer(rows, many=True).data,
    )
    return {'agents': agents, 'pagination': pagination}


def get_active_agents() -> list[dict]:
    """Active agents for dropdowns, ordered by name."""
    agents = Agent.objects.active().order_by('name')
    return AgentMinimalSerializer(agents, many=True).data


def get_agent_by_id(agent_id: UUID) -> Agent | None:
    return Agent.objects.filter(id=agent_id).first()


def get_agent_transactions(agent: Agent, *, date_from: date, date_to: date) -> dict:
    """
    Policies sold by an agent that started within [date_from, date_to].

    Returns:
        Report with transactions, summed amounts and the agent summary
    """
    queryset = Policy.objects.for_agent(agent.id).started_between(date_from, date_to)

    report = get_policy_transactions(queryset)
    report['agent'] = AgentMinimalSerializer(agent).data
    report['start_date'] = date_from.isoformat()
    report['end_date'] = date_to.isoformat()
    return report


def get_agent_commission_summary(agent: Agent) -> dict:
    """
    Lifetime commission totals of an agent.

    Response:
        {
            "total_commission": sum of agent_commission,
            "total_policies": int,
            "total_premium": sum of premium_amount,
            "average_commission": total_commission / total_policies (0 when none)
        }
    """
    policies = list(Policy.objects.for_agent(agent.id))
    totals = summarize(policies)
    count = len(policies)

    return {
        'agent': AgentMinimalSerializer(agent).data,
        'total_commission': totals.agent_commission,
        'total_policies': count,
        'total_premium': totals.premium_amount,
        'average_commission': totals.agent_commission / count if count else 0.0,
    }
