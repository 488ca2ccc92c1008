"""
Policy Status Classifier

Derives a policy's lifecycle status from its end date and "now".

Rule:
    days_until_expiry = (end_date - now), truncated toward zero to whole days
    days_until_expiry < 0   -> 'expired'
    days_until_expiry <= 30 -> 'expiring-soon'
    otherwise               -> 'active'

start_date is accepted but not used: a policy that has not started yet is
still reported 'active' when it ends more than 30 days from now.
"""
from __future__ import annotations

import math
from datetime import UTC, date, datetime, time

STATUS_ACTIVE = 'active'
STATUS_EXPIRING_SOON = 'expiring-soon'
STATUS_EXPIRED = 'expired'

POLICY_STATUSES = (STATUS_ACTIVE, STATUS_EXPIRING_SOON, STATUS_EXPIRED)

EXPIRING_SOON_DAYS = 30

_SECONDS_PER_DAY = 86400


def _as_instant(value: date | datetime, reference: datetime) -> datetime:
    """
    Normalize a date or datetime to a datetime comparable with `reference`.

    A calendar date means midnight at the start of that day, in the
    reference's time zone when the reference is aware.
    """
    if isinstance(value, datetime):
        instant = value
    elif isinstance(value, date):
        instant = datetime.combine(value, time.min)
    else:
        raise TypeError(f'Expected date or datetime, got {type(value).__name__}')

    if reference.tzinfo is not None and instant.tzinfo is None:
        return instant.replace(tzinfo=reference.tzinfo)
    if reference.tzinfo is None and instant.tzinfo is not None:
        return instant.astimezone(UTC).replace(tzinfo=None)
    return instant


def whole_days_between(start: date | datetime, end: date | datetime) -> int:
    """Whole days from `start` to `end`, truncated toward zero (negative when end is earlier)."""
    if not isinstance(start, datetime) and not isinstance(end, datetime):
        return (end - start).days

    reference = start if isinstance(start, datetime) else end
    start_instant = _as_instant(start, reference)
    end_instant = _as_instant(end, reference)
    seconds = (end_instant - start_instant).total_seconds()
    return math.trunc(seconds / _SECONDS_PER_DAY)


def days_until_expiry(end_date: date | datetime, now: date | datetime | None = None) -> int:
    if now is None:
        now = datetime.now(UTC)
    return whole_days_between(now, end_date)


def classify_status(
    start_date: date | datetime | None,
    end_date: date | datetime,
    now: date | datetime | None = None,
) -> str:
    """
    Classify a policy as 'active', 'expiring-soon' or 'expired'.

    Args:
        start_date: Policy start date (ignored by the rule)
        end_date: Policy end date
        now: Reference instant, defaults to the current UTC time

    Returns:
        One of POLICY_STATUSES
    """
    remaining = days_until_expiry(end_date, now)

    if remaining < 0:
        return STATUS_EXPIRED
    if remaining <= EXPIRING_SOON_DAYS:
        return STATUS_EXPIRING_SOON
    return STATUS_ACTIVE
