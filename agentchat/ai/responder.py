# agentchat/ai/responder.py
import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from agentchat.ai.generator import TextGenerator
from agentchat.ai.schemas import Agent, AgentCallResult, AgentResponse
from agentchat.errors import AgentCallFailure

logger = logging.getLogger(__name__)


PROMPT_TEMPLATE = """{system_context}

User Message: "{user_message}"

Task: Provide your unique perspective on this request. Focus on your expertise ({personality}).

Response format:
1. Share your opinion/advice about the user's request (2-3 sentences)
2. You can optionally suggest specific ideas

Keep your response authentic to your personality and expertise. Be helpful but stay true to your character."""


def build_prompt(agent: Agent, user_message: str) -> str:
    """Compose the persona instructions, the user's message and the reply instructions"""
    return PROMPT_TEMPLATE.format(
        system_context=agent.effective_system_prompt,
        user_message=user_message,
        personality=agent.personality,
    )


class AgentResponder:
    """
    Produces one agent's reply, isolating backend failures from the rest of the turn
    """

    def __init__(self, generator: TextGenerator, timeout: Optional[float] = None):
        self.generator = generator
        self.timeout = timeout

    async def respond_result(self, agent: Agent, user_message: str) -> AgentCallResult:
        """
        Generate a reply for a single agent.

        Args:
            agent: The agent that should reply
            user_message: The user's message, shared read-only by all agents

        Returns:
            A result holding either the response or the failure reason
        """
        prompt = build_prompt(agent, user_message)
        try:
            text = await asyncio.wait_for(self.generator.generate(prompt), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Timed out after {self.timeout}s generating response for agent {agent.id}")
            return AgentCallResult(agent=agent, error=AgentCallFailure(agent.id, "timeout", e))
        except Exception as e:
            logger.error(f"Error generating response for agent {agent.id}: {str(e)}")
            return AgentCallResult(agent=agent, error=AgentCallFailure(agent.id, str(e) or type(e).__name__, e))

        if not isinstance(text, str) or not text.strip():
            logger.error(f"Empty or malformed response for agent {agent.id}")
            return AgentCallResult(agent=agent, error=AgentCallFailure(agent.id, "empty response"))

        return AgentCallResult(
            agent=agent,
            response=AgentResponse(
                agent_id=agent.id,
                agent_name=agent.name,
                avatar=agent.avatar,
                personality=agent.personality,
                response=text.strip(),
                timestamp=datetime.now(timezone.utc),
            ),
        )

    async def respond(self, agent: Agent, user_message: str) -> Optional[AgentResponse]:
        """Generate a reply for a single agent, or None if the call failed"""
        result = await self.respond_result(agent, user_message)
        return result.response
