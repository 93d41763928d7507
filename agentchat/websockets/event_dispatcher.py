# agentchat/websockets/event_dispatcher.py
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List

import pydantic
from fastapi import WebSocket, WebSocketDisconnect

from agentchat.ai.schemas import Agent
from agentchat.errors import AgentChatError
from agentchat.schemas.conversations import TurnRequest
from agentchat.services.chat_service import ChatService

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class ChatSession:
    """Per-connection state handed to every event handler"""
    websocket: WebSocket
    user_id: str
    chat_service: ChatService

    async def send(self, payload: Dict[str, Any]) -> None:
        await self.websocket.send_json({**payload, "timestamp": _timestamp()})

    async def send_error(self, code: str, detail: str) -> None:
        await self.send({"type": "error", "error": code, "detail": detail})


EventHandler = Callable[[ChatSession, Dict[str, Any]], Awaitable[None]]


class EventDispatcher:
    """Dispatches WebSocket events to appropriate handlers based on event type."""

    def __init__(self):
        self.handlers: Dict[str, EventHandler] = {}

    def register_handler(self, event_type: str, handler: EventHandler):
        self.handlers[event_type] = handler

    async def dispatch(self, session: ChatSession, event_data: Dict[str, Any]):
        event_type = event_data.get("type")
        handler = self.handlers.get(event_type)
        if not handler:
            logger.warning(f"No handler registered for event type: {event_type}")
            await session.send_error("unknown_event", f"Unknown event type: {event_type}")
            return

        try:
            await handler(session, event_data)
        except WebSocketDisconnect:
            # Client left mid-event; nothing can be sent back
            raise
        except AgentChatError as e:
            await session.send_error(e.code, e.detail)
        except pydantic.ValidationError as e:
            await session.send_error("validation_error", str(e))
        except Exception as e:
            logger.error(f"Error in event handler for {event_type}: {str(e)}")
            await session.send_error("internal_error", f"Error processing {event_type}")


class EventRegistry:
    """Registry for all supported event handlers."""

    def __init__(self):
        self.dispatcher = EventDispatcher()
        self._setup_handlers()

    def _setup_handlers(self):
        self.dispatcher.register_handler("message", self.handle_message)
        self.dispatcher.register_handler("ping", self.handle_ping)

    async def handle_message(self, session: ChatSession, event_data: Dict[str, Any]):
        """
        Handle message events.

        Once the responding agents are chosen a ``typing`` event lists them in
        reply order; the ``turn`` event with the replies follows when every
        agent has finished.
        """
        request = TurnRequest.model_validate(event_data)

        async def announce_typing(agents: List[Agent]):
            await session.send({
                "type": "typing",
                "agents": [
                    {"agentId": agent.id, "agentName": agent.name, "avatar": agent.avatar}
                    for agent in agents
                ],
            })

        response = await session.chat_service.send_message(
            session.user_id, request, on_selected=announce_typing
        )
        await session.send({"type": "turn", **response.model_dump(mode="json", by_alias=True)})

    async def handle_ping(self, session: ChatSession, event_data: Dict[str, Any]):
        """Respond to ping events with a pong."""
        await session.send({"type": "pong"})


# Global event registry instance.
event_registry = EventRegistry()
