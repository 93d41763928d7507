# agentchat/api/dependencies.py
from typing import Callable, Type
from fastapi import Depends
from sqlalchemy.orm import Session

from agentchat.ai.generator import get_generator
from agentchat.ai.orchestrator import Orchestrator
from agentchat.ai.registry import AgentRegistry
from agentchat.config import get_settings
from agentchat.database import get_db
from agentchat.services.agent_service import AgentService
from agentchat.services.chat_service import ChatService


def get_service(service_class: Type) -> Callable:
    """Factory function to create service dependencies with DB injection"""
    def _get_service(db: Session = Depends(get_db)):
        return service_class(db)
    return _get_service


def get_orchestrator() -> Orchestrator:
    """Turn engine wired to the process-wide generation backend"""
    settings = get_settings()
    return Orchestrator(get_generator(), timeout=settings.AI_REQUEST_TIMEOUT)


def get_registry(
    agent_service: AgentService = Depends(get_service(AgentService))
) -> AgentRegistry:
    return AgentRegistry(agent_service)


def get_chat_service(
    db: Session = Depends(get_db),
    orchestrator: Orchestrator = Depends(get_orchestrator),
    registry: AgentRegistry = Depends(get_registry)
) -> ChatService:
    return ChatService(db, orchestrator, registry)
