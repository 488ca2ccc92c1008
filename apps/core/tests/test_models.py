"""
Model Unit Tests

Tests for core Django models: derived policy amounts on save, name
normalization and the soft-delete managers.
"""
import uuid
from datetime import timedelta

from django.db import IntegrityError, transaction
from django.test import TestCase
from django.utils import timezone

from apps.core.models import Agent, InsuranceProvider, Policy, User, VehicleClass
from tests.factories import AgentFactory, InsuranceProviderFactory, PolicyFactory, UserFactory


class UserModelTests(TestCase):
    """Tests for the User model."""

    def test_user_str_representation(self):
        user = User(id=uuid.uuid4(), name='Kiran Rao', email='kiran@example.com')
        self.assertEqual(str(user), 'Kiran Rao (kiran@example.com)')

    def test_is_admin_property(self):
        self.assertTrue(User(role=User.ROLE_ADMIN).is_admin)
        self.assertFalse(User(role=User.ROLE_SUB_USER).is_admin)

    def test_default_role_is_sub_user(self):
        self.assertEqual(User().role, 'sub-user')


class RateMasterModelTests(TestCase):
    """Tests for InsuranceProvider and VehicleClass."""

    def test_provider_name_normalized_on_save(self):
        provider = InsuranceProviderFactory(name='  New India ASSURANCE ')
        provider.refresh_from_db()
        self.assertEqual(provider.name, 'new india assurance')

    def test_vehicle_class_name_normalized_on_save(self):
        vehicle_class = VehicleClass.objects.create(
            name='Goods Carrier',
            commission_rate=8,
            agent_rate=5,
            our_rate=3,
        )
        self.assertEqual(vehicle_class.name, 'goods carrier')

    def test_duplicate_alive_name_violates_constraint(self):
        InsuranceProviderFactory(name='tata aig')
        with self.assertRaises(IntegrityError), transaction.atomic():
            InsuranceProviderFactory(name='Tata AIG')

    def test_deleted_name_does_not_block_new_record(self):
        InsuranceProviderFactory(name='tata aig').soft_delete()
        InsuranceProviderFactory(name='tata aig')
        self.assertEqual(InsuranceProvider.all_objects.filter(name='tata aig').count(), 2)


class SoftDeleteTests(TestCase):
    """Tests for the objects / all_objects managers."""

    def test_objects_hides_deleted_rows(self):
        agent = AgentFactory()
        agent.soft_delete()

        self.assertFalse(Agent.objects.filter(id=agent.id).exists())
        self.assertTrue(Agent.all_objects.filter(id=agent.id).exists())

    def test_soft_delete_records_user(self):
        user = UserFactory()
        agent = AgentFactory()

        agent.soft_delete(user.id)

        stored = Agent.all_objects.get(id=agent.id)
        self.assertTrue(stored.is_deleted)
        self.assertEqual(stored.updated_by_id, user.id)

    def test_queryset_soft_delete(self):
        AgentFactory.create_batch(3, city='Pune')
        AgentFactory(city='Goa')

        updated = Agent.objects.filter(city='Pune').soft_delete()

        self.assertEqual(updated, 3)
        self.assertEqual(Agent.objects.count(), 1)
        self.assertEqual(Agent.all_objects.filter(is_deleted=True).count(), 3)

    def test_agent_location(self):
        agent = Agent(address='1 Main St', city='Pune', state='MH')
        self.assertEqual(agent.location, {'address': '1 Main St', 'city': 'Pune', 'state': 'MH'})


class PolicyModelTests(TestCase):
    """Tests for derived amounts and cached status on Policy."""

    def test_derived_fields_computed_on_save(self):
        policy = PolicyFactory(premium_amount=100000, agent_rate=5, our_rate=3, tds_rate=10, gst_rate=18)
        policy.refresh_from_db()

        self.assertEqual(policy.total_commission, 8)
        self.assertEqual(policy.commission, 8000)
        self.assertEqual(policy.agent_commission, 5000)
        self.assertEqual(policy.tds_amount, 800)
        self.assertEqual(policy.profit_after_tds, 7200)
        self.assertEqual(policy.our_profit, 2200)
        self.assertEqual(policy.gst_amount, 18000)
        self.assertEqual(policy.gross_amount, 118000)

    def test_derived_fields_cannot_drift(self):
        policy = PolicyFactory()
        policy.our_profit = 1
        policy.save()
        policy.refresh_from_db()

        self.assertEqual(policy.our_profit, 2200)

    def test_partial_save_still_recomputes(self):
        policy = PolicyFactory()
        policy.premium_amount = 50000
        policy.save(update_fields=['premium_amount'])
        policy.refresh_from_db()

        self.assertEqual(policy.commission, 4000)
        self.assertEqual(policy.gross_amount, 59000)

    def test_status_cached_on_save(self):
        today = timezone.localdate()
        policy = PolicyFactory(start_date=today - timedelta(days=300), end_date=today + timedelta(days=20))

        self.assertEqual(policy.status, 'expiring-soon')
        self.assertEqual(policy.current_status, 'expiring-soon')
        self.assertEqual(policy.days_until_expiry, 20)

    def test_refresh_status_with_explicit_date(self):
        policy = PolicyFactory()
        self.assertEqual(policy.refresh_status(policy.end_date + timedelta(days=1)), 'expired')

    def test_end_date_must_follow_start_date(self):
        today = timezone.localdate()
        with self.assertRaises(IntegrityError), transaction.atomic():
            PolicyFactory(start_date=today, end_date=today)

    def test_duplicate_alive_policy_number_violates_constraint(self):
        PolicyFactory(policy_number='POL-DUP')
        with self.assertRaises(IntegrityError), transaction.atomic():
            PolicyFactory(policy_number='POL-DUP')

    def test_policy_manager_helpers(self):
        policy = PolicyFactory()
        PolicyFactory()

        self.assertEqual(list(Policy.objects.for_agent(policy.agent_id)), [policy])
        self.assertEqual(Policy.objects.search(policy.policy_number.lower()).count(), 1)

    def test_status_counts(self):
        today = timezone.localdate()
        PolicyFactory(start_date=today - timedelta(days=10), end_date=today + timedelta(days=30))
        PolicyFactory(start_date=today - timedelta(days=10), end_date=today + timedelta(days=31))
        PolicyFactory(start_date=today - timedelta(days=10), end_date=today)

        counts = Policy.objects.status_counts(today)

        self.assertEqual(counts, {'total': 3, 'active': 1, 'expiring_soon': 2, 'expired': 0})
