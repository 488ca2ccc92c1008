"""
Policy Services

Business logic for policy writes. Every write resolves the four rates,
recomputes the derived amounts and re-derives the cached status.
"""
import logging
from datetime import date
from uuid import UUID

from django.db import IntegrityError, transaction

from apps.core.authentication import AuthenticatedUser
from apps.core.exceptions import ConflictError, NotFoundError, ValidationError
from apps.core.models import Policy
from services.commission_calculator import compute_derived_fields
from services.policy_status import STATUS_ACTIVE, STATUS_EXPIRED, STATUS_EXPIRING_SOON
from services.rate_table import RATE_FIELDS, PolicyRates, resolve_policy_rates

logger = logging.getLogger(__name__)

DUPLICATE_POLICY_MESSAGE = 'A policy with this policy number already exists'


def _require_rates(rates: PolicyRates) -> PolicyRates:
    if rates.missing:
        raise ValidationError(
            'Rates could not be resolved',
            details={field: [f'{field} is required'] for field in rates.missing},
        )
    return rates


def _is_duplicate_policy_number(error: IntegrityError) -> bool:
    # PostgreSQL names the constraint; SQLite names the indexed column
    message = str(error)
    return 'uq_policies_number_alive' in message or f'{Policy._meta.db_table}.policy_number' in message


def _save(policy: Policy, **kwargs) -> None:
    try:
        with transaction.atomic():
            policy.save(**kwargs)
    except IntegrityError as e:
        if not _is_duplicate_policy_number(e):
            raise
        logger.warning(f'Policy save rejected by constraint: {e}')
        raise ConflictError(DUPLICATE_POLICY_MESSAGE, details={'policy_number': [DUPLICATE_POLICY_MESSAGE]}) from e


@transaction.atomic
def create_policy(*, user: AuthenticatedUser, data: dict) -> Policy:
    """
    Create a policy.

    Args:
        user: The acting user (recorded as creator)
        data: Validated PolicyWriteSerializer data

    Returns:
        The saved Policy with derived fields and status populated
    """
    data = dict(data)
    rates = _require_rates(resolve_policy_rates(
        data['insurance_provider'],
        data['vehicle_type'],
        overrides={field: data.pop(field, None) for field in RATE_FIELDS},
    ))

    policy = Policy(
        **data,
        **rates.as_dict(),
        created_by_id=user.audit_id,
        updated_by_id=user.audit_id,
    )
    _save(policy)

    logger.info(f'Policy {policy.policy_number} created by {user.id}')
    return policy


@transaction.atomic
def update_policy(*, user: AuthenticatedUser, policy_id: UUID, data: dict) -> Policy:
    """
    Update a policy and recalculate it.

    Rates keep their snapshot unless supplied. When the provider or vehicle
    class changes, rates not supplied are re-defaulted from the new one.

    Raises:
        NotFoundError: If the policy does not exist or is deleted
    """
    policy = Policy.objects.select_for_update().filter(id=policy_id).first()
    if not policy:
        raise NotFoundError('Policy not found')

    data = dict(data)
    overrides = {field: data.pop(field) for field in RATE_FIELDS if field in data}

    provider = data.get('insurance_provider')
    vehicle_class = data.get('vehicle_type')
    provider_changed = provider is not None and provider.id != policy.insurance_provider_id
    vehicle_class_changed = vehicle_class is not None and vehicle_class.id != policy.vehicle_type_id

    defaults = resolve_policy_rates(
        provider if provider_changed else None,
        vehicle_class if vehicle_class_changed else None,
    )
    for field in RATE_FIELDS:
        value = overrides.get(field)
        if value is None:
            value = getattr(defaults, field)
        if value is not None:
            setattr(policy, field, value)

    for field, value in data.items():
        setattr(policy, field, value)
    policy.updated_by_id = user.audit_id

    _save(policy)

    logger.info(f'Policy {policy.policy_number} updated by {user.id}')
    return policy


@transaction.atomic
def delete_policy(*, user: AuthenticatedUser, policy_id: UUID) -> bool:
    """
    Soft delete a policy.

    Returns:
        True if deleted, False if not found
    """
    policy = Policy.objects.filter(id=policy_id).first()
    if not policy:
        return False

    policy.soft_delete(user.audit_id)
    logger.info(f'Policy {policy.policy_number} deleted by {user.id}')
    return True


def calculate_preview(
    *,
    premium_amount: float,
    insurance_provider=None,
    vehicle_type=None,
    **overrides,
) -> dict:
    """
    Run the calculation without saving anything.

    Returns:
        {"rates": {...resolved rates}, "derived": {...derived amounts}}
    """
    rates = _require_rates(resolve_policy_rates(insurance_provider, vehicle_type, overrides))
    derived = compute_derived_fields(premium_amount, **rates.as_dict())
    return {
        'premium_amount': premium_amount,
        'rates': rates.as_dict(),
        'derived': derived.as_dict(),
    }


@transaction.atomic
def refresh_policy_statuses(*, today: date) -> dict:
    """
    Re-derive the cached status of every non-deleted policy as of `today`.

    Returns:
        Number of rows changed per new status
    """
    updated = {}
    for status in (STATUS_EXPIRED, STATUS_EXPIRING_SOON, STATUS_ACTIVE):
        updated[status] = (
            Policy.objects
            .with_current_status(status, today)
            .exclude(status=status)
            .update(status=status)
        )

    logger.info(f'Policy statuses refreshed as of {today}: {updated}')
    return {'as_of': today.isoformat(), 'updated': updated}
