# agentchat/services/agent_service.py
from sqlalchemy.orm import Session
from typing import List, Optional

from agentchat.errors import NotFoundError
from agentchat.models.custom_agent import (
    CustomAgent, DEFAULT_AVATAR, DEFAULT_COLOR, DEFAULT_RESPONSE_RATE
)


class AgentService:
    """Service for handling user-authored agent operations"""

    def __init__(self, db: Session):
        self.db = db

    def create_custom_agent(
        self,
        user_id: str,
        name: str,
        personality: str,
        avatar: Optional[str] = None,
        color: Optional[str] = None,
        system_prompt: Optional[str] = None,
        response_rate: Optional[float] = None,
    ) -> CustomAgent:
        """
        Create a custom agent owned by a user.

        Args:
            user_id: ID of the owning user.
            name: Display name.
            personality: Short personality label used in prompts.
            avatar: Optional emoji avatar.
            color: Optional display color class.
            system_prompt: Optional persona instructions; synthesised at prompt time when empty.
            response_rate: Probability of replying to a message; 0 is kept as-is.

        Returns:
            The created CustomAgent instance.
        """
        agent = CustomAgent(
            user_id=user_id,
            name=name,
            personality=personality,
            avatar=avatar or DEFAULT_AVATAR,
            color=color or DEFAULT_COLOR,
            system_prompt=system_prompt or None,
            response_rate=DEFAULT_RESPONSE_RATE if response_rate is None else response_rate,
        )
        self.db.add(agent)
        self.db.commit()
        self.db.refresh(agent)
        return agent

    def get_custom_agent(self, user_id: str, agent_id: str) -> Optional[CustomAgent]:
        """Get a custom agent by ID, only if it belongs to the user"""
        return self.db.query(CustomAgent).filter(
            CustomAgent.id == agent_id,
            CustomAgent.user_id == user_id
        ).first()

    def list_custom_agents(self, user_id: str) -> List[CustomAgent]:
        """List a user's custom agents, most recently created first"""
        return self.db.query(CustomAgent).filter(
            CustomAgent.user_id == user_id
        ).order_by(CustomAgent.created_at.desc(), CustomAgent.id.desc()).all()

    def delete_custom_agent(self, user_id: str, agent_id: str) -> None:
        """
        Delete a custom agent owned by the user.

        Raises:
            NotFoundError: The agent does not exist or belongs to someone else.
        """
        agent = self.get_custom_agent(user_id, agent_id)
        if not agent:
            raise NotFoundError("Custom agent not found")

        self.db.delete(agent)
        self.db.commit()
