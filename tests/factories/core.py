"""
Core Model Factories

Factories for User, InsuranceProvider, VehicleClass, Agent and Policy.
"""
import uuid
from datetime import timedelta

import factory
from django.utils import timezone
from faker import Faker

from apps.core.models import Agent, InsuranceProvider, Policy, User, VehicleClass

fake = Faker()


class UserFactory(factory.django.DjangoModelFactory):
    """Factory for User model."""

    class Meta:
        model = User

    id = factory.LazyFunction(uuid.uuid4)
    auth_uid = factory.LazyFunction(lambda: uuid.uuid4().hex)
    name = factory.LazyAttribute(lambda _: fake.name())
    username = factory.Sequence(lambda n: f'user{n:04d}')
    email = factory.Sequence(lambda n: f'user{n:04d}@example.com')
    phone_number = factory.Sequence(lambda n: f'8{n:09d}')
    role = User.ROLE_SUB_USER
    is_active = True


class AdminUserFactory(UserFactory):
    role = User.ROLE_ADMIN


class InsuranceProviderFactory(factory.django.DjangoModelFactory):
    """Factory for InsuranceProvider model."""

    class Meta:
        model = InsuranceProvider

    id = factory.LazyFunction(uuid.uuid4)
    name = factory.Sequence(lambda n: f'provider {n:04d}')
    agent_rate = 5.0
    our_rate = 3.0
    tds = 10.0
    gst = 18.0
    is_active = True


class VehicleClassFactory(factory.django.DjangoModelFactory):
    """Factory for VehicleClass model."""

    class Meta:
        model = VehicleClass

    id = factory.LazyFunction(uuid.uuid4)
    name = factory.Sequence(lambda n: f'vehicle class {n:04d}')
    commission_rate = 8.0
    agent_rate = 5.0
    our_rate = 3.0
    is_active = True


class AgentFactory(factory.django.DjangoModelFactory):
    """Factory for Agent model."""

    class Meta:
        model = Agent

    id = factory.LazyFunction(uuid.uuid4)
    name = factory.LazyAttribute(lambda _: fake.name())
    phone_number = factory.Sequence(lambda n: f'9{n:09d}')
    email = factory.Sequence(lambda n: f'agent{n:04d}@example.com')
    address = factory.LazyAttribute(lambda _: fake.street_address())
    city = factory.LazyAttribute(lambda _: fake.city())
    state = factory.LazyAttribute(lambda _: fake.state())
    is_active = True


class PolicyFactory(factory.django.DjangoModelFactory):
    """
    Factory for Policy model.

    Defaults to a policy that started 30 days ago and ends in 335 days
    (active). Derived amounts are computed on save.
    """

    class Meta:
        model = Policy

    id = factory.LazyFunction(uuid.uuid4)
    name = factory.LazyAttribute(lambda _: fake.name())
    phone_number = factory.Sequence(lambda n: f'7{n:09d}')
    email = factory.LazyAttribute(lambda _: fake.email())
    address = factory.LazyAttribute(lambda _: fake.address())
    policy_number = factory.Sequence(lambda n: f'POL-{n:06d}')
    start_date = factory.LazyFunction(lambda: timezone.localdate() - timedelta(days=30))
    end_date = factory.LazyAttribute(lambda o: o.start_date + timedelta(days=365))
    agent = factory.SubFactory(AgentFactory)
    insurance_provider = factory.SubFactory(InsuranceProviderFactory)
    vehicle_type = factory.SubFactory(VehicleClassFactory)
    vehicle_registration_number = factory.Sequence(lambda n: f'MH12AB{n:04d}')
    vehicle_make = 'Maruti'
    vehicle_model = 'Swift'
    premium_amount = 100000.0
    agent_rate = 5.0
    our_rate = 3.0
    tds_rate = 10.0
    gst_rate = 18.0
