from fastapi import APIRouter, Depends, status

from agentchat.schemas import (
    ConversationHistory,
    ConversationTitle,
    MessageList,
    TitleUpdate,
    TurnRequest,
    TurnResponse,
)
from agentchat.api.auth import get_current_user
from agentchat.api.dependencies import get_chat_service, get_service
from agentchat.services.chat_service import ChatService
from agentchat.services.conversation_service import ConversationService
from agentchat.models.user import User

router = APIRouter()


@router.post("/", response_model=TurnResponse)
async def send_message(
    turn: TurnRequest,
    current_user: User = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
):
    """
    Send a message and collect replies from the conversation's agents.

    Creates the conversation when no conversationId is given. Agents that fail
    to reply are left out of `agents` but still counted in `respondingAgents`.
    """
    return await chat_service.send_message(current_user.id, turn)


@router.get("/history", response_model=ConversationHistory)
async def get_history(
    current_user: User = Depends(get_current_user),
    conversation_service: ConversationService = Depends(get_service(ConversationService)),
):
    """
    Get the current user's conversations with last-message preview and unread count.
    """
    return {"conversations": conversation_service.list_history(current_user.id)}


@router.get("/{conversation_id}/messages", response_model=MessageList)
async def get_messages(
    conversation_id: str,
    current_user: User = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
):
    """
    Get every message of a conversation, oldest first, with agent details.
    """
    return {"messages": chat_service.get_messages(current_user.id, conversation_id)}


@router.post("/{conversation_id}/read")
async def mark_read(
    conversation_id: str,
    current_user: User = Depends(get_current_user),
    conversation_service: ConversationService = Depends(get_service(ConversationService)),
):
    """
    Mark a conversation as read.
    """
    conversation_service.mark_read(current_user.id, conversation_id)
    return {"success": True}


@router.patch("/{conversation_id}/title", response_model=ConversationTitle)
async def update_title(
    conversation_id: str,
    title_update: TitleUpdate,
    current_user: User = Depends(get_current_user),
    conversation_service: ConversationService = Depends(get_service(ConversationService)),
):
    """
    Rename a conversation.
    """
    conversation = conversation_service.update_title(current_user.id, conversation_id, title_update.title)
    return ConversationTitle(id=conversation.id, title=conversation.title)


@router.delete("/{conversation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_conversation(
    conversation_id: str,
    current_user: User = Depends(get_current_user),
    conversation_service: ConversationService = Depends(get_service(ConversationService)),
):
    """
    Delete a conversation and all of its messages.
    """
    conversation_service.delete_conversation(current_user.id, conversation_id)
    return None
