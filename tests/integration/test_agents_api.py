"""
Integration Tests for Agents API

Tests agent CRUD, the nested location payload, the agent transaction
report and the lifetime commission summary.
"""
import uuid
from datetime import timedelta

import pytest
from rest_framework import status

from apps.core.models import Agent
from tests.factories import AgentFactory, PolicyFactory

AGENT_PAYLOAD = {
    'name': 'Meera Joshi',
    'phone_number': '9988776655',
    'email': 'Meera@Example.com',
    'location': {'address': '21 FC Road', 'city': 'Pune', 'state': 'Maharashtra'},
}


@pytest.mark.django_db
class TestAgentsCRUD:
    """Tests for /api/agents/"""

    def test_create_agent(self, authenticated_api_client):
        client, _ = authenticated_api_client

        response = client.post('/api/agents/', AGENT_PAYLOAD, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['email'] == 'meera@example.com'
        assert response.data['location'] == {'address': '21 FC Road', 'city': 'Pune', 'state': 'Maharashtra'}
        agent = Agent.objects.get(id=response.data['id'])
        assert agent.city == 'Pune'

    def test_location_city_and_state_optional(self, authenticated_api_client):
        client, _ = authenticated_api_client

        response = client.post(
            '/api/agents/',
            {**AGENT_PAYLOAD, 'location': {'address': '21 FC Road'}},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['location'] == {'address': '21 FC Road', 'city': '', 'state': ''}

    @pytest.mark.parametrize('phone', ['12345', '98765432101', '98765abcde'])
    def test_phone_must_be_ten_digits(self, authenticated_api_client, phone):
        client, _ = authenticated_api_client

        response = client.post('/api/agents/', {**AGENT_PAYLOAD, 'phone_number': phone}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['details']['phone_number'] == ['Phone number must be exactly 10 digits']

    def test_invalid_email_rejected(self, authenticated_api_client):
        client, _ = authenticated_api_client

        response = client.post('/api/agents/', {**AGENT_PAYLOAD, 'email': 'meera@'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['details']['email'] == ['Invalid email address']

    def test_dangerous_characters_in_address_rejected(self, authenticated_api_client):
        client, _ = authenticated_api_client

        response = client.post(
            '/api/agents/',
            {**AGENT_PAYLOAD, 'location': {'address': '<script>alert(1)</script>'}},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'location' in response.data['details']

    def test_duplicate_phone_rejected(self, authenticated_api_client, agent):
        client, _ = authenticated_api_client

        response = client.post(
            '/api/agents/',
            {**AGENT_PAYLOAD, 'phone_number': agent.phone_number},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['details']['phone_number'] == ['An agent with this phone number already exists']

    def test_partial_location_update_keeps_other_fields(self, authenticated_api_client, agent):
        client, _ = authenticated_api_client

        response = client.patch(f'/api/agents/{agent.id}', {'location': {'city': 'Nashik'}}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['location'] == {'address': '14 Station Road', 'city': 'Nashik', 'state': 'Maharashtra'}

    def test_list_search_by_city(self, authenticated_api_client, agent):
        client, _ = authenticated_api_client
        AgentFactory(city='Nagpur')

        response = client.get('/api/agents/', {'search': 'pune'})

        assert [item['id'] for item in response.data['agents']] == [str(agent.id)]

    def test_active_agents(self, authenticated_api_client, agent):
        client, _ = authenticated_api_client
        AgentFactory(is_active=False)

        response = client.get('/api/agents/active')

        assert response.data == [{'id': str(agent.id), 'name': 'Suresh Patil', 'phone_number': '9876500001'}]

    def test_delete_agent_keeps_policies(self, authenticated_api_client, policy, agent):
        client, _ = authenticated_api_client

        response = client.delete(f'/api/agents/{agent.id}')

        assert response.status_code == status.HTTP_200_OK
        assert client.get(f'/api/agents/{agent.id}').status_code == status.HTTP_404_NOT_FOUND
        assert client.get(f'/api/policies/{policy.id}').status_code == status.HTTP_200_OK

    def test_missing_agent_returns_404(self, authenticated_api_client):
        client, _ = authenticated_api_client

        response = client.get(f'/api/agents/{uuid.uuid4()}')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'error': 'Agent not found'}


@pytest.mark.django_db
class TestAgentTransactions:
    """Tests for GET /api/agents/{id}/transactions"""

    def test_report_for_date_range(self, authenticated_api_client, agent, today):
        client, _ = authenticated_api_client
        inside = PolicyFactory(agent=agent, start_date=today - timedelta(days=20))
        PolicyFactory(agent=agent, start_date=today - timedelta(days=90))
        PolicyFactory(start_date=today - timedelta(days=20))

        response = client.get(f'/api/agents/{agent.id}/transactions', {
            'startDate': (today - timedelta(days=30)).isoformat(),
            'endDate': today.isoformat(),
        })

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['transactions'][0]['id'] == str(inside.id)
        assert response.data['summary']['agent_commission'] == 5000.0
        assert response.data['agent']['name'] == 'Suresh Patil'

    def test_bounds_are_inclusive(self, authenticated_api_client, agent, today):
        client, _ = authenticated_api_client
        start = today - timedelta(days=30)
        PolicyFactory(agent=agent, start_date=start)
        PolicyFactory(agent=agent, start_date=today)

        response = client.get(f'/api/agents/{agent.id}/transactions', {
            'startDate': start.isoformat(),
            'endDate': today.isoformat(),
        })

        assert response.data['count'] == 2

    def test_end_date_defaults_to_today(self, authenticated_api_client, agent, today):
        client, _ = authenticated_api_client

        response = client.get(f'/api/agents/{agent.id}/transactions', {
            'startDate': (today - timedelta(days=7)).isoformat(),
        })

        assert response.data['end_date'] == today.isoformat()

    def test_start_date_required(self, authenticated_api_client, agent):
        client, _ = authenticated_api_client

        response = client.get(f'/api/agents/{agent.id}/transactions')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'error': 'startDate is required'}

    def test_start_after_end_rejected(self, authenticated_api_client, agent, today):
        client, _ = authenticated_api_client

        response = client.get(f'/api/agents/{agent.id}/transactions', {
            'startDate': today.isoformat(),
            'endDate': (today - timedelta(days=1)).isoformat(),
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'error': 'Start date must not be after end date'}


@pytest.mark.django_db
class TestAgentCommissionSummary:
    def test_summary(self, authenticated_api_client, agent):
        client, _ = authenticated_api_client
        PolicyFactory(agent=agent, premium_amount=100000)
        PolicyFactory(agent=agent, premium_amount=50000)

        response = client.get(f'/api/agents/{agent.id}/commission-summary')

        assert response.data['total_commission'] == 7500.0
        assert response.data['total_policies'] == 2
        assert response.data['total_premium'] == 150000.0
        assert response.data['average_commission'] == 3750.0

    def test_summary_without_policies(self, authenticated_api_client, agent):
        client, _ = authenticated_api_client

        response = client.get(f'/api/agents/{agent.id}/commission-summary')

        assert response.data['total_policies'] == 0
        assert response.data['average_commission'] == 0.0
