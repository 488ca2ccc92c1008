"""
Reference Variant Unit Tests
"""
from django.test import SimpleTestCase

from apps.core.models import Agent, Policy
from apps.core.references import Resolved, Unresolved, reference_for


class ReferenceTests(SimpleTestCase):
    def test_unresolved_reference_never_loads_the_row(self):
        agent = Agent(name='Suresh', phone_number='9876500001')
        policy = Policy(agent_id=agent.id)

        reference = reference_for(policy, 'agent', resolve=False)

        self.assertIsInstance(reference, Unresolved)
        self.assertEqual(reference.as_dict(), {'id': str(agent.id)})

    def test_resolved_reference_serializes_fields(self):
        agent = Agent(name='Suresh', phone_number='9876500001')
        policy = Policy(agent=agent)

        reference = reference_for(policy, 'agent', resolve=True, fields=('name', 'phone_number'))

        self.assertIsInstance(reference, Resolved)
        self.assertEqual(reference.id, agent.id)
        self.assertEqual(reference.as_dict(), {'id': str(agent.id), 'name': 'Suresh', 'phone_number': '9876500001'})
