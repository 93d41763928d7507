# agentchat/services/chat_service.py
import logging
from sqlalchemy.orm import Session
from typing import List, Optional, Sequence

from agentchat.ai.orchestrator import Orchestrator, SelectionHook
from agentchat.ai.registry import AgentRegistry
from agentchat.ai.schemas import Agent
from agentchat.errors import NotFoundError, ValidationError
from agentchat.models.enums import SenderType
from agentchat.schemas.conversations import TurnRequest, TurnResponse
from agentchat.schemas.messages import MessageOut
from agentchat.services.agent_service import AgentService
from agentchat.services.conversation_service import ConversationService
from agentchat.services.message_service import MessageService

logger = logging.getLogger(__name__)


class ChatService:
    """
    Drives a chat turn around the orchestrator: validation, conversation
    bookkeeping and persistence of the user message and agent replies.
    """

    def __init__(self, db: Session, orchestrator: Orchestrator, registry: Optional[AgentRegistry] = None):
        self.db = db
        self.orchestrator = orchestrator
        self.registry = registry or AgentRegistry(AgentService(db))
        self.conversation_service = ConversationService(db)
        self.message_service = MessageService(db)

    def _check_agent_ids(self, agent_ids: Sequence[str], roster: Sequence[Agent]) -> None:
        known = {agent.id for agent in roster}
        unknown = [agent_id for agent_id in agent_ids if agent_id not in known]
        if unknown:
            raise NotFoundError(f"Unknown agents: {', '.join(unknown)}")

    async def send_message(
        self,
        user_id: str,
        request: TurnRequest,
        on_selected: Optional[SelectionHook] = None
    ) -> TurnResponse:
        """
        Post a user message and collect the agents' replies.

        The conversation is created on the first message when no id is given.
        The user message is stored before any agent is asked, and each reply is
        stored in selection order once the whole turn has finished.

        Raises:
            ValidationError: The message is empty
            NotFoundError: Unknown conversation or agent ids
            ConfigurationError: No generation backend is configured
        """
        content = (request.message or "").strip()
        if not content:
            raise ValidationError("Message content is required")

        roster = self.registry.resolve_roster(user_id)
        if request.active_agents is not None:
            self._check_agent_ids(request.active_agents, roster)

        if request.conversation_id:
            conversation = self.conversation_service.get_user_conversation(user_id, request.conversation_id)
            if request.active_agents is not None:
                conversation = self.conversation_service.update_agents(conversation, request.active_agents)
        else:
            conversation = self.conversation_service.create_conversation(
                user_id=user_id,
                agent_ids=request.active_agents or [],
                roster=roster,
                conversation_type=request.conversation_type
            )
            logger.info(f"Created conversation {conversation.id} for user {user_id}")

        self.message_service.append_message(conversation.id, SenderType.USER, user_id, content)

        result = await self.orchestrator.run_turn(
            content,
            roster,
            list(conversation.agents or []),
            on_selected=on_selected
        )

        for response in result.agents:
            self.message_service.append_message(
                conversation.id, SenderType.AGENT, response.agent_id, response.response
            )

        return TurnResponse(
            conversation_id=conversation.id,
            agents=result.agents,
            total_agents=result.total_agents,
            responding_agents=result.responding_agents
        )

    def get_messages(self, user_id: str, conversation_id: str) -> List[MessageOut]:
        """List a conversation's messages with agent details resolved"""
        conversation = self.conversation_service.get_user_conversation(user_id, conversation_id)
        roster = self.registry.resolve_roster(user_id)
        messages = self.message_service.list_messages(conversation.id)
        return self.message_service.format_messages(messages, roster)
