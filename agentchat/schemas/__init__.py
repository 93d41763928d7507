"""
Schema definitions for the application.
This module exports all schemas for easy importing throughout the app.
"""

# Import from base
from agentchat.schemas.base import CamelModel

# Import from agents
from agentchat.schemas.agents import (
    CustomAgentCreate, AgentOut, AgentList
)

# Import from conversations
from agentchat.schemas.conversations import (
    TurnRequest, TurnResponse, ConversationSummary, ConversationHistory,
    TitleUpdate, ConversationTitle
)

# Import from messages
from agentchat.schemas.messages import (
    MessageAgent, MessageOut, MessageList
)
