from typing import List, Optional
from pydantic import Field, field_validator

from agentchat.schemas.base import CamelModel


class CustomAgentCreate(CamelModel):
    """Properties required to create a custom agent"""
    name: str = Field(..., min_length=1, max_length=100)
    personality: str = Field(..., min_length=1)
    avatar: Optional[str] = Field(None, max_length=16)
    color: Optional[str] = Field(None, max_length=32)
    system_prompt: Optional[str] = None
    response_rate: Optional[float] = Field(None, ge=0, le=1)

    @field_validator("name", "personality")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class AgentOut(CamelModel):
    """An agent as shown to the client, built-in or custom"""
    id: str
    name: str
    avatar: str
    color: str
    personality: str
    system_prompt: Optional[str] = None
    response_rate: float
    is_custom: bool

    @classmethod
    def from_agent(cls, agent) -> "AgentOut":
        return cls(**agent.model_dump())


class AgentList(CamelModel):
    agents: List[AgentOut]
