"""
Integration Test Fixtures

Provides real database fixtures using Factory Boy.
These fixtures create actual database records for true integration testing.
"""
from datetime import timedelta

import pytest

from tests.factories import (
    AgentFactory,
    InsuranceProviderFactory,
    PolicyFactory,
    VehicleClassFactory,
)

# =============================================================================
# Rate Table Fixtures
# =============================================================================


@pytest.fixture
def provider(db):
    """Provider with 10% TDS and 18% GST."""
    return InsuranceProviderFactory(name='acme general', tds=10.0, gst=18.0)


@pytest.fixture
def vehicle_class(db):
    """Vehicle class with 5% agent and 3% brokerage rate."""
    return VehicleClassFactory(name='private car', agent_rate=5.0, our_rate=3.0)


# =============================================================================
# Agent Fixtures
# =============================================================================


@pytest.fixture
def agent(db):
    """Create a test agent."""
    return AgentFactory(
        name='Suresh Patil',
        phone_number='9876500001',
        address='14 Station Road',
        city='Pune',
        state='Maharashtra',
    )


# =============================================================================
# Policy Fixtures
# =============================================================================


@pytest.fixture
def policy(agent, provider, vehicle_class):
    """Active policy: 100000 premium at 5/3/10/18."""
    return PolicyFactory(
        agent=agent,
        insurance_provider=provider,
        vehicle_type=vehicle_class,
        name='Ravi Kumar',
        policy_number='POL-100001',
    )


@pytest.fixture
def policies_by_status(agent, provider, vehicle_class, today):
    """One active, one expiring-soon and one expired policy."""
    common = {'agent': agent, 'insurance_provider': provider, 'vehicle_type': vehicle_class}
    return {
        'active': PolicyFactory(
            **common,
            start_date=today - timedelta(days=30),
            end_date=today + timedelta(days=335),
        ),
        'expiring-soon': PolicyFactory(
            **common,
            start_date=today - timedelta(days=355),
            end_date=today + timedelta(days=10),
        ),
        'expired': PolicyFactory(
            **common,
            start_date=today - timedelta(days=366),
            end_date=today - timedelta(days=1),
        ),
    }
