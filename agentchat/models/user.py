# agentchat/models/user.py
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from agentchat.database import Base
from agentchat.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """
    Model representing user accounts
    The id is the ``sub`` claim of the bearer token
    """
    __tablename__ = "users"

    id = Column(String(64), primary_key=True, index=True)
    email = Column(String(100), nullable=True)

    custom_agents = relationship("CustomAgent", back_populates="user", cascade="all, delete-orphan")
    conversations = relationship("Conversation", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User {self.id} - {self.email}>"
