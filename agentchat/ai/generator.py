# agentchat/ai/generator.py
import logging
from functools import lru_cache
from typing import Optional, Protocol, Union

from pydantic_ai import Agent as LLMAgent
from pydantic_ai.models import Model
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider

from agentchat.config import get_settings

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """The backend answered, but not with usable text"""


class TextGenerator(Protocol):
    """Single-shot, stateless text completion"""

    async def generate(self, prompt: str) -> str: ...


class PydanticAIGenerator:
    """
    Text generation backed by a PydanticAI agent with plain-text output
    """

    def __init__(self, model: Union[Model, str]):
        self.agent = LLMAgent(model, output_type=str)

    @classmethod
    def for_openai(cls, model_name: str, api_key: str) -> "PydanticAIGenerator":
        provider = OpenAIProvider(api_key=api_key)
        return cls(OpenAIChatModel(model_name, provider=provider))

    async def generate(self, prompt: str) -> str:
        result = await self.agent.run(prompt)
        text = (result.output or "").strip()
        if not text:
            raise GenerationError("Model returned an empty response")
        return text


@lru_cache()
def get_generator() -> Optional[TextGenerator]:
    """
    Build the process-wide generator from settings.

    Returns None when no API key is configured; the orchestrator turns that
    into a configuration error for every turn.
    """
    settings = get_settings()
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY not found in environment; agent responses are disabled")
        return None
    logger.info(f"Initializing generation backend with model {settings.AI_MODEL_NAME}")
    return PydanticAIGenerator.for_openai(settings.AI_MODEL_NAME, settings.OPENAI_API_KEY)
