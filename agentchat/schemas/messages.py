from typing import List, Optional
from datetime import datetime

from agentchat.models.enums import SenderType
from agentchat.schemas.base import CamelModel


class MessageAgent(CamelModel):
    """Display details of the agent that sent a message"""
    id: str
    name: str
    avatar: str
    color: str
    personality: str


class MessageOut(CamelModel):
    """A stored message with sender details resolved"""
    id: str
    type: SenderType
    content: str
    timestamp: datetime
    agent: Optional[MessageAgent] = None


class MessageList(CamelModel):
    messages: List[MessageOut]
