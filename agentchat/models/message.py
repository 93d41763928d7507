# agentchat/models/message.py
from functools import partial

from sqlalchemy import Column, String, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from agentchat.database import Base
from agentchat.models.mixins import TimestampMixin, generate_id


class Message(Base, TimestampMixin):
    __tablename__ = "messages"

    id = Column(String(64), primary_key=True, default=partial(generate_id, "msg"))
    conversation_id = Column(String(64), ForeignKey("conversations.id"), nullable=False, index=True)
    sender_type = Column(String(16), nullable=False)
    # User id or agent id; empty for system messages
    sender_id = Column(String(64), nullable=True)
    content = Column(Text, nullable=False)

    conversation = relationship("Conversation", back_populates="messages")

    __table_args__ = (
        Index('ix_messages_conversation_created', "conversation_id", "created_at"),
        Index('ix_messages_conversation_sender_type', "conversation_id", "sender_type"),
    )

    def __repr__(self):
        return f"<Message {self.id} in Conversation {self.conversation_id}>"
