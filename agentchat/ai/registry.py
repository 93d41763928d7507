# agentchat/ai/registry.py
import logging
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple

from agentchat.ai.schemas import Agent

logger = logging.getLogger(__name__)


BUILTIN_AGENTS: Tuple[Agent, ...] = (
    Agent(
        id="creative",
        name="Creative Spark",
        avatar="🎨",
        color="bg-purple-500",
        personality="creative and innovative",
        system_prompt=(
            "You are a creative expert. Focus on visual storytelling, engaging narratives, "
            "and innovative ideas. Use emojis and creative formatting."
        ),
        response_rate=0.9,
    ),
    Agent(
        id="professional",
        name="Pro Advisor",
        avatar="💼",
        color="bg-blue-500",
        personality="professional and structured",
        system_prompt=(
            "You are a professional advisor. Focus on value propositions, credibility, "
            "and structured content. Be formal and data-backed."
        ),
        response_rate=0.85,
    ),
    Agent(
        id="casual",
        name="Casual Buddy",
        avatar="😎",
        color="bg-green-500",
        personality="friendly and casual",
        system_prompt=(
            "You are a friendly, casual enthusiast. Keep things light, conversational, "
            "and relatable. Use casual language and humor."
        ),
        response_rate=0.7,
    ),
    Agent(
        id="analytical",
        name="Data Mind",
        avatar="📊",
        color="bg-orange-500",
        personality="analytical and data-driven",
        system_prompt=(
            "You are a data-driven analyst. Focus on metrics, statistics, and performance "
            "insights. Back opinions with numbers."
        ),
        response_rate=0.6,
    ),
    Agent(
        id="minimalist",
        name="Short & Sweet",
        avatar="✨",
        color="bg-pink-500",
        personality="minimalist and concise",
        system_prompt=(
            "You are a minimalist strategist. Keep responses extremely brief and impactful. "
            "Focus on clarity over elaboration."
        ),
        response_rate=0.5,
    ),
)


class CustomAgentStore(Protocol):
    """Anything that can list a user's custom agent records, newest first"""

    def list_custom_agents(self, user_id: str) -> Sequence: ...


class AgentRegistry:
    """
    Merges the built-in agents with a user's custom agents into one roster
    """

    def __init__(self, store: CustomAgentStore, builtin_agents: Iterable[Agent] = BUILTIN_AGENTS):
        self.store = store
        self.builtin_agents = tuple(builtin_agents)

    def resolve_roster(self, user_id: str) -> List[Agent]:
        """
        Build the roster visible to a user.

        Built-in agents come first, then the user's custom agents in the order
        the store returns them (most recent first). Store failures propagate.

        Args:
            user_id: ID of the requesting user

        Returns:
            List of agents with unique ids
        """
        records = self.store.list_custom_agents(user_id)
        candidates = list(self.builtin_agents) + [Agent.from_custom_record(r) for r in records]

        roster = []
        seen = set()
        for agent in candidates:
            if agent.id in seen:
                logger.warning(f"Duplicate agent id {agent.id} for user {user_id}; keeping the first definition")
                continue
            seen.add(agent.id)
            roster.append(agent)
        return roster

    @staticmethod
    def find(roster: Sequence[Agent], agent_id: str) -> Optional[Agent]:
        """Look up an agent by id within an already-resolved roster"""
        return next((agent for agent in roster if agent.id == agent_id), None)
