"""
Rate Table

Default policy rates looked up from the selected provider and vehicle class.

    provider       -> tds_rate, gst_rate      (from provider.tds / provider.gst)
    vehicle class  -> agent_rate, our_rate    (from vehicle_class.agent_rate / our_rate)

Defaults only pre-fill the policy form. Any rate the user supplies wins, and
whatever is resolved is snapshotted onto the policy, so later edits to a
provider or vehicle class never change existing policies.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

RATE_FIELDS = ('agent_rate', 'our_rate', 'tds_rate', 'gst_rate')


@dataclass(frozen=True, slots=True)
class PolicyRates:
    """The four rate inputs of the commission calculator; None means unknown."""
    agent_rate: float | None = None
    our_rate: float | None = None
    tds_rate: float | None = None
    gst_rate: float | None = None

    def as_dict(self) -> dict[str, float | None]:
        return asdict(self)

    @property
    def missing(self) -> list[str]:
        return [field for field in RATE_FIELDS if getattr(self, field) is None]


def _read(source: Any, attribute: str) -> float | None:
    if source is None:
        return None
    if isinstance(source, Mapping):
        value = source.get(attribute)
    else:
        value = getattr(source, attribute, None)
    return None if value is None else float(value)


def default_rates(provider: Any = None, vehicle_class: Any = None) -> PolicyRates:
    """
    Default rates for a provider / vehicle class pair.

    Either side may be omitted; its rates are then None.

    Args:
        provider: Object or mapping with `tds` and `gst`
        vehicle_class: Object or mapping with `agent_rate` and `our_rate`
    """
    return PolicyRates(
        agent_rate=_read(vehicle_class, 'agent_rate'),
        our_rate=_read(vehicle_class, 'our_rate'),
        tds_rate=_read(provider, 'tds'),
        gst_rate=_read(provider, 'gst'),
    )


def resolve_policy_rates(
    provider: Any = None,
    vehicle_class: Any = None,
    overrides: Mapping[str, Any] | None = None,
) -> PolicyRates:
    """
    Resolve the rates to snapshot onto a policy.

    A rate present (not None) in `overrides` wins over the default.

    Returns:
        PolicyRates; check `.missing` for rates that could not be resolved
    """
    defaults = default_rates(provider, vehicle_class)
    overrides = overrides or {}

    resolved = {}
    for field in RATE_FIELDS:
        override = overrides.get(field)
        resolved[field] = float(override) if override is not None else getattr(defaults, field)
    return PolicyRates(**resolved)
