"""
Agent Services

Business logic for agent operations.
"""
import logging
from uuid import UUID

from django.db import transaction

from apps.core.authentication import AuthenticatedUser
from apps.core.exceptions import NotFoundError
from apps.core.models import Agent

logger = logging.getLogger(__name__)


@transaction.atomic
def create_agent(*, user: AuthenticatedUser, data: dict) -> Agent:
    """
    Create a new agent.

    Args:
        user: The acting user
        data: Validated AgentSerializer data (location already flattened)

    Returns:
        The created agent
    """
    agent = Agent.objects.create(
        **data,
        created_by_id=user.audit_id,
        updated_by_id=user.audit_id,
    )
    logger.info(f'Agent {agent.id} created by {user.id}')
    return agent


@transaction.atomic
def update_agent(*, user: AuthenticatedUser, agent_id: UUID, data: dict) -> Agent:
    """
    Update an agent.

    Raises:
        NotFoundError: If the agent does not exist or is deleted
    """
    agent = Agent.objects.filter(id=agent_id).first()
    if not agent:
        raise NotFoundError('Agent not found')

    for field, value in data.items():
        setattr(agent, field, value)
    agent.updated_by_id = user.audit_id
    agent.save()

    logger.info(f'Agent {agent.id} updated by {user.id}')
    return agent


@transaction.atomic
def delete_agent(*, user: AuthenticatedUser, agent_id: UUID) -> bool:
    """
    Soft delete an agent. Their policies are kept.

    Returns:
        True if deleted, False if not found
    """
    agent = Agent.objects.filter(id=agent_id).first()
    if not agent:
        return False

    agent.soft_delete(user.audit_id)
    logger.info(f'Agent {agent.id} deleted by {user.id}')
    return True
