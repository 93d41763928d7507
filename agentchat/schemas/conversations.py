from typing import List, Optional
from pydantic import Field, field_validator
from datetime import datetime

from agentchat.ai.schemas import AgentResponse
from agentchat.models.enums import ConversationType
from agentchat.schemas.base import CamelModel


class TurnRequest(CamelModel):
    """A user message plus the agents that should be active for it"""
    message: Optional[str] = None
    active_agents: Optional[List[str]] = None
    conversation_id: Optional[str] = None
    conversation_type: Optional[ConversationType] = None

    @field_validator("active_agents")
    @classmethod
    def dedupe_agents(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        # Active agents form an ordered set
        if value is None:
            return value
        return list(dict.fromkeys(value))


class TurnResponse(CamelModel):
    conversation_id: str
    agents: List[AgentResponse]
    total_agents: int
    responding_agents: int


class ConversationSummary(CamelModel):
    """One row of the conversation history sidebar"""
    id: str
    title: str
    preview: str
    timestamp: datetime
    unread: int
    type: ConversationType
    agents: List[str]
    members: int


class ConversationHistory(CamelModel):
    conversations: List[ConversationSummary]


class TitleUpdate(CamelModel):
    title: str = Field(..., max_length=100)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value):
        # Length is checked on the trimmed title
        return value.strip() if isinstance(value, str) else value


class ConversationTitle(CamelModel):
    id: str
    title: str
