"""
Commission Core

Pure, synchronous business logic shared by the API apps:
- commission_calculator: derived money fields of a policy
- policy_status: active / expiring-soon / expired classification
- aggregation: totals over a set of policies
- rate_table: default rates from provider and vehicle class

Nothing in this package touches the database, the network or shared state.
"""

from .aggregation import SUMMARY_FIELDS, SummaryTotals, summarize
from .commission_calculator import DERIVED_FIELDS, DerivedFields, compute_derived_fields
from .policy_status import (
    EXPIRING_SOON_DAYS,
    POLICY_STATUSES,
    STATUS_ACTIVE,
    STATUS_EXPIRED,
    STATUS_EXPIRING_SOON,
    classify_status,
    days_until_expiry,
    whole_days_between,
)
from .rate_table import RATE_FIELDS, PolicyRates, default_rates, resolve_policy_rates

__all__ = [
    'DERIVED_FIELDS',
    'DerivedFields',
    'compute_derived_fields',
    'EXPIRING_SOON_DAYS',
    'POLICY_STATUSES',
    'STATUS_ACTIVE',
    'STATUS_EXPIRED',
    'STATUS_EXPIRING_SOON',
    'classify_status',
    'days_until_expiry',
    'whole_days_between',
    'SUMMARY_FIELDS',
    'SummaryTotals',
    'summarize',
    'RATE_FIELDS',
    'PolicyRates',
    'default_rates',
    'resolve_policy_rates',
]
