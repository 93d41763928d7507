# agentchat/ai/selector.py
import random
from typing import List, Optional, Sequence

from agentchat.ai.schemas import Agent


class ResponseSelector:
    """
    Decides which candidate agents reply to a message.

    Every candidate gets an independent Bernoulli trial weighted by its
    ``response_rate``. The random source is injected so tests can seed it.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def select(self, candidates: Sequence[Agent]) -> List[Agent]:
        selected = [agent for agent in candidates if self.rng.random() < agent.response_rate]

        # Never leave a non-empty conversation without a reply
        if not selected and candidates:
            selected.append(candidates[0])

        return selected
