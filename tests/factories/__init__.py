"""
Factory Boy Factories for BrokerDesk Models

Import all factories here for easy access in tests.
"""
from tests.factories.core import (
    AdminUserFactory,
    AgentFactory,
    InsuranceProviderFactory,
    PolicyFactory,
    UserFactory,
    VehicleClassFactory,
)

__all__ = [
    'UserFactory',
    'AdminUserFactory',
    'InsuranceProviderFactory',
    'VehicleClassFactory',
    'AgentFactory',
    'PolicyFactory',
]
