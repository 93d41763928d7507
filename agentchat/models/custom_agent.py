# agentchat/models/custom_agent.py
from functools import partial

from sqlalchemy import Column, Float, ForeignKey, Index, String, Text, CheckConstraint
from sqlalchemy.orm import relationship

from agentchat.database import Base
from agentchat.models.mixins import TimestampMixin, generate_id

DEFAULT_AVATAR = "🤖"
DEFAULT_COLOR = "bg-indigo-500"
DEFAULT_RESPONSE_RATE = 0.8


class CustomAgent(Base, TimestampMixin):
    __tablename__ = "custom_agents"

    # The "custom-" prefix keeps these ids disjoint from the built-in slugs
    id = Column(String(64), primary_key=True, default=partial(generate_id, "custom"))
    user_id = Column(String(64), ForeignKey("users.id"), nullable=False)
    name = Column(String(100), nullable=False)
    avatar = Column(String(16), nullable=False, default=DEFAULT_AVATAR)
    color = Column(String(32), nullable=False, default=DEFAULT_COLOR)
    personality = Column(Text, nullable=False)
    system_prompt = Column(Text, nullable=True)
    response_rate = Column(Float, nullable=False, default=DEFAULT_RESPONSE_RATE)

    user = relationship("User", back_populates="custom_agents")

    __table_args__ = (
        CheckConstraint("response_rate >= 0 AND response_rate <= 1", name="check_response_rate_range"),
        Index("ix_custom_agents_user_created", "user_id", "created_at"),
    )

    def __repr__(self):
        return f"<CustomAgent {self.id} - {self.name}>"
