from fastapi import APIRouter, Depends, status

from agentchat.schemas import AgentList, AgentOut, CustomAgentCreate
from agentchat.api.auth import get_current_user
from agentchat.api.dependencies import get_registry, get_service
from agentchat.ai.registry import AgentRegistry
from agentchat.ai.schemas import Agent
from agentchat.services.agent_service import AgentService
from agentchat.models.user import User

router = APIRouter()


@router.get("/", response_model=AgentList)
async def list_agents(
    current_user: User = Depends(get_current_user),
    registry: AgentRegistry = Depends(get_registry)
):
    """
    Get every agent available to the current user.

    Built-in agents come first, followed by the user's custom agents, newest first.
    """
    roster = registry.resolve_roster(current_user.id)
    return {"agents": [AgentOut.from_agent(agent) for agent in roster]}


@router.get("/custom", response_model=AgentList)
async def list_custom_agents(
    current_user: User = Depends(get_current_user),
    agent_service: AgentService = Depends(get_service(AgentService))
):
    """
    Get the current user's custom agents, newest first.
    """
    records = agent_service.list_custom_agents(current_user.id)
    return {"agents": [AgentOut.from_agent(Agent.from_custom_record(r)) for r in records]}


@router.post("/custom", response_model=AgentOut, status_code=status.HTTP_201_CREATED)
async def create_custom_agent(
    agent: CustomAgentCreate,
    current_user: User = Depends(get_current_user),
    agent_service: AgentService = Depends(get_service(AgentService))
):
    """
    Create a custom agent for the current user.

    Avatar, color and response rate fall back to defaults when omitted.
    """
    record = agent_service.create_custom_agent(
        user_id=current_user.id,
        name=agent.name,
        personality=agent.personality,
        avatar=agent.avatar,
        color=agent.color,
        system_prompt=agent.system_prompt,
        response_rate=agent.response_rate
    )
    return AgentOut.from_agent(Agent.from_custom_record(record))


@router.delete("/custom/{agent_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_custom_agent(
    agent_id: str,
    current_user: User = Depends(get_current_user),
    agent_service: AgentService = Depends(get_service(AgentService))
):
    """
    Delete one of the current user's custom agents.
    """
    agent_service.delete_custom_agent(current_user.id, agent_id)
    return None
