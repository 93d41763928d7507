# agentchat/ai/orchestrator.py
import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Sequence

from agentchat.ai.generator import TextGenerator
from agentchat.ai.responder import AgentResponder
from agentchat.ai.schemas import Agent, TurnResult, TurnState
from agentchat.ai.selector import ResponseSelector
from agentchat.errors import ConfigurationError

logger = logging.getLogger(__name__)

SelectionHook = Callable[[List[Agent]], Awaitable[None]]


class Orchestrator:
    """
    Runs one turn: pick the responding agents, query them concurrently and
    collect their replies in selection order.
    """

    def __init__(
        self,
        generator: Optional[TextGenerator],
        selector: Optional[ResponseSelector] = None,
        timeout: Optional[float] = None,
    ):
        self.generator = generator
        self.selector = selector or ResponseSelector()
        self.responder = AgentResponder(generator, timeout=timeout) if generator else None

    def _advance(self, result: TurnResult, state: TurnState) -> None:
        logger.debug(f"Turn state {result.state.value} -> {state.value}")
        result.state = state

    async def run_turn(
        self,
        user_message: str,
        roster: Sequence[Agent],
        active_agent_ids: Sequence[str],
        on_selected: Optional[SelectionHook] = None,
    ) -> TurnResult:
        """
        Run one full turn.

        Args:
            user_message: The user's message
            roster: Every agent visible to the user
            active_agent_ids: Agents attached to the conversation
            on_selected: Awaited once with the selected agents before dispatch

        Returns:
            The ordered replies plus the eligible and attempted agent counts

        Raises:
            ConfigurationError: No generation backend is configured
        """
        if self.responder is None:
            raise ConfigurationError("AI service not configured - OPENAI_API_KEY missing")

        result = TurnResult()

        self._advance(result, TurnState.SELECTING)
        active = set(active_agent_ids)
        candidates = [agent for agent in roster if agent.id in active]
        selected = self.selector.select(candidates)
        result.total_agents = len(candidates)
        result.responding_agents = len(selected)

        if on_selected is not None:
            await on_selected(selected)

        self._advance(result, TurnState.DISPATCHED)
        # gather keeps results in argument order, i.e. selection order
        call_results = await asyncio.gather(
            *(self.responder.respond_result(agent, user_message) for agent in selected)
        )

        self._advance(result, TurnState.AGGREGATING)
        for call in call_results:
            if call.success:
                result.agents.append(call.response)
            else:
                result.failures.append(call.error)

        self._advance(result, TurnState.COMPLETED)
        logger.info(
            f"Turn completed: {len(result.agents)}/{result.responding_agents} replies "
            f"from {result.total_agents} eligible agents"
        )
        for failure in result.failures:
            logger.warning(f"Agent {failure.agent_id} did not reply: {failure.reason}")

        return result
