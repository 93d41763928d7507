# agentchat/websockets/connection_manager.py
import json
import logging
from typing import Optional

from fastapi import HTTPException, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session

from agentchat.ai.orchestrator import Orchestrator
from agentchat.models.user import User
from agentchat.services.auth_service import AuthService
from agentchat.services.chat_service import ChatService
from agentchat.websockets.event_dispatcher import ChatSession, event_registry

logger = logging.getLogger(__name__)


async def authenticate(websocket: WebSocket, access_token: str, auth_service: AuthService) -> Optional[User]:
    try:
        return auth_service.authenticate(access_token)
    except HTTPException as e:
        await websocket.send_json({"type": "error", "error": "unauthorized", "detail": e.detail})
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return None


async def handle_chat_connection(
    websocket: WebSocket,
    access_token: str,
    db: Session,
    orchestrator: Orchestrator
):
    try:
        await websocket.accept()
    except Exception as e:
        logger.error(f"Failed to accept WebSocket connection: {str(e)}")
        return

    user = await authenticate(websocket, access_token, AuthService(db))
    if user is None:
        return

    session = ChatSession(
        websocket=websocket,
        user_id=user.id,
        chat_service=ChatService(db, orchestrator)
    )

    try:
        while True:
            raw_data = await websocket.receive_text()
            try:
                event_data = json.loads(raw_data)
            except json.JSONDecodeError:
                await session.send_error("invalid_json", "Invalid JSON format")
                continue
            if not isinstance(event_data, dict):
                await session.send_error("invalid_event", "Events must be JSON objects")
                continue

            await event_registry.dispatcher.dispatch(session, event_data)
    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected: user {user.id}")
    finally:
        logger.info(f"Connection closed for user {user.id}")
