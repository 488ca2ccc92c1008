"""
Commission Calculator

The single authoritative calculation of a policy's derived money fields.

Every place that needs commission, TDS, profit or GST figures (policy
create/update, calculation preview, reports) goes through
compute_derived_fields(). Reports never recompute per-policy figures; they
sum the values this function produced when the policy was saved.

Formula (fixed order):
    total_commission  = agent_rate + our_rate            (a percentage)
    commission        = premium_amount * total_commission / 100
    agent_commission  = premium_amount * agent_rate / 100
    tds_amount        = commission * tds_rate / 100
    profit_after_tds  = commission - tds_amount
    our_profit        = profit_after_tds - agent_commission
    gst_amount        = premium_amount * gst_rate / 100
    gross_amount      = premium + gst_amount
"""
from __future__ import annotations

from dataclasses import asdict, dataclass

DERIVED_FIELDS = (
    'total_commission',
    'commission',
    'agent_commission',
    'tds_amount',
    'profit_after_tds',
    'our_profit',
    'gst_amount',
    'gross_amount',
)


@dataclass(frozen=True, slots=True)
class DerivedFields:
    """
    Result of compute_derived_fields().

    total_commission is a percentage (agent_rate + our_rate), not a currency
    amount. Every other field is a currency amount in full float precision;
    rounding for display is left to the caller.
    """
    total_commission: float
    commission: float
    agent_commission: float
    tds_amount: float
    profit_after_tds: float
    our_profit: float
    gst_amount: float
    gross_amount: float

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


def compute_derived_fields(
    premium_amount: float,
    agent_rate: float,
    our_rate: float,
    tds_rate: float,
    gst_rate: float,
) -> DerivedFields:
    """
    Compute all derived fields of a policy from its premium and four rates.

    Inputs are trusted and not coerced; type and range checks belong to the
    validation layer. Rates outside [0, 100] still give an arithmetically
    consistent result, and NaN/Infinity propagate to the outputs instead of
    raising.

    Args:
        premium_amount: Policy premium
        agent_rate: Agent commission rate (%)
        our_rate: Brokerage rate (%)
        tds_rate: Tax deducted at source on the commission (%)
        gst_rate: GST added on top of the premium (%)

    Returns:
        DerivedFields with all eight values computed together
    """
    total_commission = agent_rate + our_rate
    commission = premium_amount * total_commission / 100
    agent_commission = premium_amount * agent_rate / 100
    tds_amount = commission * tds_rate / 100
    profit_after_tds = commission - tds_amount
    our_profit = profit_after_tds - agent_commission
    gst_amount = premium_amount * gst_rate / 100
    gross_amount = premium_amount + gst_amount

    return DerivedFields(
        total_commission=total_commission,
        commission=commission,
        agent_commission=agent_commission,
        tds_amount=tds_amount,
        profit_after_tds=profit_after_tds,
        our_profit=our_profit,
        gst_amount=gst_amount,
        gross_amount=gross_amount,
    )
