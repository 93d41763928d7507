# agentchat/ai/schemas.py
import enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime

from agentchat.errors import AgentCallFailure


class Agent(BaseModel):
    """A persona that can reply to the user, built-in or user-authored"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    avatar: str
    color: str
    personality: str
    system_prompt: Optional[str] = None
    response_rate: float = Field(..., ge=0, le=1)
    is_custom: bool = False

    @property
    def effective_system_prompt(self) -> str:
        """The persona instructions, synthesised from name and personality when absent"""
        if self.system_prompt and self.system_prompt.strip():
            return self.system_prompt
        return f"You are {self.name}. {self.personality}."

    @classmethod
    def from_custom_record(cls, record) -> "Agent":
        """Map a stored custom agent row onto the common agent shape"""
        return cls(
            id=str(record.id),
            name=record.name,
            avatar=record.avatar,
            color=record.color,
            personality=record.personality,
            system_prompt=record.system_prompt,
            response_rate=record.response_rate,
            is_custom=True,
        )


class AgentResponse(BaseModel):
    """One agent's reply to a user message"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    agent_id: str
    agent_name: str
    avatar: str
    personality: str
    response: str
    timestamp: datetime


class AgentCallResult(BaseModel):
    """Outcome of one responder call: a response on success, the failure otherwise"""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    agent: Agent
    response: Optional[AgentResponse] = None
    error: Optional[AgentCallFailure] = None

    @property
    def success(self) -> bool:
        return self.response is not None


class TurnState(str, enum.Enum):
    RECEIVED = "received"
    SELECTING = "selecting"
    DISPATCHED = "dispatched"
    AGGREGATING = "aggregating"
    COMPLETED = "completed"


class TurnResult(BaseModel):
    """
    Aggregated outcome of one turn.

    ``total_agents`` is the eligible pool, ``responding_agents`` the number of
    agents that were asked to reply, so it exceeds ``len(agents)`` when some
    calls failed. ``failures`` is kept for logging and is not sent to clients.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    agents: List[AgentResponse] = Field(default_factory=list)
    total_agents: int = 0
    responding_agents: int = 0
    failures: List[AgentCallFailure] = Field(default_factory=list)
    state: TurnState = TurnState.RECEIVED
