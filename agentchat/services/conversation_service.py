# agentchat/services/conversation_service.py
from sqlalchemy.orm import Session
from typing import List, Optional, Sequence

from agentchat.ai.registry import AgentRegistry
from agentchat.ai.schemas import Agent
from agentchat.errors import NotFoundError, ValidationError
from agentchat.models.conversation import Conversation
from agentchat.models.enums import ConversationType
from agentchat.models.message import Message
from agentchat.models.mixins import utcnow
from agentchat.schemas.conversations import ConversationSummary
from agentchat.services.message_service import MessageService

DEFAULT_TITLE = "AI Chat"
EMPTY_PREVIEW = "Start a conversation..."


def conversation_title(
    conversation_type: ConversationType,
    agent_ids: Sequence[str],
    roster: Sequence[Agent]
) -> str:
    """Group chats are titled by size, single chats by their first known agent"""
    if conversation_type == ConversationType.GROUP:
        return f"Group Chat ({len(agent_ids)})"
    for agent_id in agent_ids:
        agent = AgentRegistry.find(roster, agent_id)
        if agent:
            return agent.name
    return DEFAULT_TITLE


class ConversationService:
    """Service for handling conversation operations"""

    def __init__(self, db: Session):
        self.db = db
        self.message_service = MessageService(db)

    def create_conversation(
        self,
        user_id: str,
        agent_ids: Sequence[str],
        roster: Sequence[Agent],
        conversation_type: Optional[ConversationType] = None
    ) -> Conversation:
        """
        Create a conversation for a user with an initial set of active agents.

        The type defaults to group when more than one agent is active.
        """
        agent_ids = list(agent_ids)
        if conversation_type is None:
            conversation_type = ConversationType.GROUP if len(agent_ids) > 1 else ConversationType.SINGLE

        conversation = Conversation(
            user_id=user_id,
            title=conversation_title(conversation_type, agent_ids, roster),
            type=conversation_type.value,
            agents=agent_ids,
            members=len(agent_ids)
        )
        self.db.add(conversation)
        self.db.commit()
        self.db.refresh(conversation)
        return conversation

    def get_user_conversation(self, user_id: str, conversation_id: str) -> Conversation:
        """
        Get a conversation owned by the user.

        Raises:
            NotFoundError: The conversation does not exist or belongs to someone else
        """
        conversation = self.db.query(Conversation).filter(
            Conversation.id == conversation_id,
            Conversation.user_id == user_id
        ).first()
        if not conversation:
            raise NotFoundError("Conversation not found")
        return conversation

    def update_agents(self, conversation: Conversation, agent_ids: Sequence[str]) -> Conversation:
        """Replace the active agents if they changed, keeping members in sync"""
        agent_ids = list(agent_ids)
        if list(conversation.agents or []) == agent_ids:
            return conversation

        conversation.agents = agent_ids
        conversation.members = len(agent_ids)
        self.db.commit()
        self.db.refresh(conversation)
        return conversation

    def list_history(self, user_id: str) -> List[ConversationSummary]:
        """
        Summarise a user's conversations, most recently active first.

        Each summary carries a preview of the last message and the number of
        agent messages the user has not read yet.
        """
        conversations = self.db.query(Conversation).filter(
            Conversation.user_id == user_id
        ).order_by(Conversation.updated_at.desc(), Conversation.id.desc()).all()

        history = []
        for conversation in conversations:
            last_message = self.message_service.get_last_message(conversation.id)
            history.append(ConversationSummary(
                id=conversation.id,
                title=conversation.title,
                preview=last_message.content if last_message else EMPTY_PREVIEW,
                timestamp=conversation.updated_at,
                unread=self.message_service.count_unread(conversation),
                type=ConversationType(conversation.type),
                agents=list(conversation.agents or []),
                members=conversation.members
            ))
        return history

    def mark_read(self, user_id: str, conversation_id: str) -> Conversation:
        """Mark every message in the conversation as read"""
        conversation = self.get_user_conversation(user_id, conversation_id)
        conversation.last_read = utcnow()
        self.db.commit()
        self.db.refresh(conversation)
        return conversation

    def update_title(self, user_id: str, conversation_id: str, title: str) -> Conversation:
        """Rename a conversation"""
        title = (title or "").strip()
        if not title:
            raise ValidationError("Title is required")

        conversation = self.get_user_conversation(user_id, conversation_id)
        conversation.title = title
        self.db.commit()
        self.db.refresh(conversation)
        return conversation

    def delete_conversation(self, user_id: str, conversation_id: str) -> None:
        """Delete a conversation together with all of its messages"""
        conversation = self.get_user_conversation(user_id, conversation_id)
        self.db.query(Message).filter(Message.conversation_id == conversation.id).delete()
        self.db.delete(conversation)
        self.db.commit()
