# agentchat/services/message_service.py
from sqlalchemy.orm import Session
from typing import List, Optional, Sequence

from agentchat.ai.registry import AgentRegistry
from agentchat.ai.schemas import Agent
from agentchat.models.conversation import Conversation
from agentchat.models.enums import SenderType
from agentchat.models.message import Message
from agentchat.models.mixins import utcnow
from agentchat.schemas.messages import MessageAgent, MessageOut

UNKNOWN_AGENT_NAME = "Unknown Agent"


class MessageService:
    """Service for handling message operations."""

    def __init__(self, db: Session):
        self.db = db

    def append_message(
        self,
        conversation_id: str,
        sender_type: SenderType,
        sender_id: Optional[str],
        content: str
    ) -> Message:
        """
        Append a message to a conversation and bump the conversation's activity time.

        Args:
            conversation_id: ID of the conversation.
            sender_type: Whether a user, an agent or the system sent it.
            sender_id: User or agent ID; None for system messages.
            content: The message content.

        Returns:
            The created Message instance.
        """
        message = Message(
            conversation_id=conversation_id,
            sender_type=sender_type.value,
            sender_id=sender_id,
            content=content
        )
        self.db.add(message)

        conversation = self.db.query(Conversation).filter(
            Conversation.id == conversation_id
        ).first()
        if conversation:
            conversation.updated_at = utcnow()

        self.db.commit()
        self.db.refresh(message)
        return message

    def list_messages(self, conversation_id: str) -> List[Message]:
        """Return every message of a conversation, oldest first."""
        return self.db.query(Message).filter(
            Message.conversation_id == conversation_id
        ).order_by(Message.created_at, Message.id).all()

    def get_last_message(self, conversation_id: str) -> Optional[Message]:
        """Return the most recent message of a conversation."""
        return self.db.query(Message).filter(
            Message.conversation_id == conversation_id
        ).order_by(Message.created_at.desc(), Message.id.desc()).first()

    def count_unread(self, conversation: Conversation) -> int:
        """Count agent messages created after the conversation was last read."""
        query = self.db.query(Message).filter(
            Message.conversation_id == conversation.id,
            Message.sender_type == SenderType.AGENT.value
        )
        if conversation.last_read is not None:
            query = query.filter(Message.created_at > conversation.last_read)
        return query.count()

    def format_messages(self, messages: Sequence[Message], roster: Sequence[Agent]) -> List[MessageOut]:
        """
        Attach sender details to stored messages.

        Agent senders are resolved against the user's roster; agents that no
        longer exist are rendered as an unknown agent.
        """
        formatted = []
        for message in messages:
            agent_info = None
            if message.sender_type == SenderType.AGENT.value:
                agent = AgentRegistry.find(roster, message.sender_id)
                if agent:
                    agent_info = MessageAgent(
                        id=agent.id,
                        name=agent.name,
                        avatar=agent.avatar,
                        color=agent.color,
                        personality=agent.personality
                    )
                else:
                    agent_info = MessageAgent(
                        id=message.sender_id or "",
                        name=UNKNOWN_AGENT_NAME,
                        avatar="🤖",
                        color="bg-gray-500",
                        personality="Unknown"
                    )

            formatted.append(MessageOut(
                id=message.id,
                type=SenderType(message.sender_type),
                content=message.content,
                timestamp=message.created_at,
                agent=agent_info
            ))
        return formatted
