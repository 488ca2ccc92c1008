"""
Aggregation Reducer

Sums the stored derived fields of a set of policies into SummaryTotals.

Used by the agent, provider and vehicle class transaction reports and by the
dashboard, each over a different filtered subset of policies.
"""
from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from typing import Any

SUMMARY_FIELDS = (
    'premium_amount',
    'commission',
    'agent_commission',
    'tds_amount',
    'profit_after_tds',
    'our_profit',
    'gst_amount',
    'gross_amount',
    'total_commission',
)

# Policy documents exported from the old application use camelCase keys.
_CAMEL_CASE_KEYS = {
    'premium_amount': 'premiumAmount',
    'commission': 'commission',
    'agent_commission': 'agentCommission',
    'tds_amount': 'tdsAmount',
    'profit_after_tds': 'profitAfterTDS',
    'our_profit': 'ourProfit',
    'gst_amount': 'gstAmount',
    'gross_amount': 'grossAmount',
    'total_commission': 'totalCommission',
}


@dataclass(frozen=True, slots=True)
class SummaryTotals:
    """Field-wise totals over a collection of policies."""
    premium_amount: float = 0.0
    commission: float = 0.0
    agent_commission: float = 0.0
    tds_amount: float = 0.0
    profit_after_tds: float = 0.0
    our_profit: float = 0.0
    gst_amount: float = 0.0
    gross_amount: float = 0.0
    total_commission: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


def _field_value(policy: Any, field: str) -> float:
    if isinstance(policy, Mapping):
        value = policy.get(field)
        if value is None:
            value = policy.get(_CAMEL_CASE_KEYS[field])
    else:
        value = getattr(policy, field, None)
    if value is None:
        return 0.0
    return float(value)


def summarize(policies: Iterable[Any]) -> SummaryTotals:
    """
    Sum each summary field across `policies`.

    Policies may be model instances, mappings (snake_case or camelCase keys)
    or any object exposing the fields as attributes, such as DerivedFields.
    Missing or None fields count as 0. Sums are exactly rounded (math.fsum),
    so the result does not depend on the order of the input.

    Args:
        policies: Any iterable of policy-like records

    Returns:
        SummaryTotals, all zeros for an empty input
    """
    columns: dict[str, list[float]] = {field: [] for field in SUMMARY_FIELDS}
    for policy in policies:
        for field in SUMMARY_FIELDS:
            columns[field].append(_field_value(policy, field))

    return SummaryTotals(**{field: math.fsum(values) for field, values in columns.items()})
