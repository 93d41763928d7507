# agentchat/models/conversation.py
from functools import partial

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, JSON, String
from sqlalchemy.orm import relationship

from agentchat.database import Base
from agentchat.models.enums import ConversationType
from agentchat.models.mixins import TimestampMixin, generate_id


class Conversation(Base, TimestampMixin):
    __tablename__ = "conversations"

    id = Column(String(64), primary_key=True, default=partial(generate_id, "conv"), index=True)
    user_id = Column(String(64), ForeignKey("users.id"), nullable=False)
    title = Column(String(100), nullable=False)
    type = Column(String(16), nullable=False, default=ConversationType.SINGLE.value)

    # Ordered list of active agent ids; members mirrors its length
    agents = Column(JSON, nullable=False, default=list)
    members = Column(Integer, nullable=False, default=0)

    last_read = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="conversations")
    messages = relationship("Message", back_populates="conversation", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_conversations_user_updated", "user_id", "updated_at"),
    )

    def __repr__(self):
        return f"<Conversation {self.id} - {self.title}>"
