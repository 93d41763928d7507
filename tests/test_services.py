"""Tests for conversation bookkeeping, message storage and the chat turn service."""

import asyncio

import pytest

from agentchat.ai.orchestrator import Orchestrator
from agentchat.ai.registry import BUILTIN_AGENTS
from agentchat.ai.selector import ResponseSelector
from agentchat.errors import ConfigurationError, NotFoundError, ValidationError
from agentchat.models.conversation import Conversation
from agentchat.models.enums import ConversationType, SenderType
from agentchat.models.message import Message
from agentchat.schemas.conversations import TurnRequest
from agentchat.services.agent_service import AgentService
from agentchat.services.chat_service import ChatService
from agentchat.services.conversation_service import (
    ConversationService, EMPTY_PREVIEW, conversation_title
)
from agentchat.services.message_service import MessageService

from conftest import AlwaysRandom, StubGenerator


ROSTER = list(BUILTIN_AGENTS)


class TestConversationTitle:
    def test_single_chat_is_named_after_its_agent(self):
        assert conversation_title(ConversationType.SINGLE, ["casual"], ROSTER) == "Casual Buddy"

    def test_group_chat_is_named_after_its_size(self):
        assert conversation_title(ConversationType.GROUP, ["creative", "casual", "minimalist"], ROSTER) == "Group Chat (3)"

    def test_unknown_agent_falls_back_to_default(self):
        assert conversation_title(ConversationType.SINGLE, ["ghost"], ROSTER) == "AI Chat"
        assert conversation_title(ConversationType.SINGLE, [], ROSTER) == "AI Chat"


class TestAgentService:
    def test_defaults_fill_missing_fields(self, db, user):
        agent = AgentService(db).create_custom_agent("user-1", "Poet", "lyrical")

        assert agent.id.startswith("custom-")
        assert agent.avatar == "🤖"
        assert agent.color == "bg-indigo-500"
        assert agent.response_rate == 0.8
        assert agent.system_prompt is None

    def test_explicit_zero_rate_is_kept(self, db, user):
        agent = AgentService(db).create_custom_agent("user-1", "Quiet", "shy", response_rate=0.0)

        assert agent.response_rate == 0.0

    def test_delete_is_scoped_to_owner(self, db, user):
        service = AgentService(db)
        agent = service.create_custom_agent("user-1", "Poet", "lyrical")

        with pytest.raises(NotFoundError):
            service.delete_custom_agent("someone-else", agent.id)

        service.delete_custom_agent("user-1", agent.id)
        assert service.list_custom_agents("user-1") == []


class TestConversationService:
    def test_type_is_inferred_from_agent_count(self, db, user):
        service = ConversationService(db)

        single = service.create_conversation("user-1", ["creative"], ROSTER)
        group = service.create_conversation("user-1", ["creative", "casual"], ROSTER)

        assert single.type == ConversationType.SINGLE.value
        assert single.title == "Creative Spark"
        assert group.type == ConversationType.GROUP.value
        assert group.title == "Group Chat (2)"
        assert group.members == 2

    def test_explicit_type_wins(self, db, user):
        conversation = ConversationService(db).create_conversation(
            "user-1", ["creative"], ROSTER, conversation_type=ConversationType.GROUP
        )

        assert conversation.title == "Group Chat (1)"

    def test_update_agents_keeps_members_in_sync(self, db, user):
        service = ConversationService(db)
        conversation = service.create_conversation("user-1", ["creative"], ROSTER)

        updated = service.update_agents(conversation, ["casual", "analytical", "minimalist"])

        assert updated.agents == ["casual", "analytical", "minimalist"]
        assert updated.members == 3

    def test_conversations_are_private_to_their_owner(self, db, user):
        service = ConversationService(db)
        conversation = service.create_conversation("user-1", ["creative"], ROSTER)

        with pytest.raises(NotFoundError):
            service.get_user_conversation("someone-else", conversation.id)

    def test_history_shows_preview_and_unread_agent_messages(self, db, user):
        service = ConversationService(db)
        messages = MessageService(db)
        empty = service.create_conversation("user-1", ["creative"], ROSTER)
        busy = service.create_conversation("user-1", ["casual"], ROSTER)
        messages.append_message(busy.id, SenderType.USER, "user-1", "hi")
        messages.append_message(busy.id, SenderType.AGENT, "casual", "hey there")

        history = {summary.id: summary for summary in service.list_history("user-1")}

        assert history[empty.id].preview == EMPTY_PREVIEW
        assert history[empty.id].unread == 0
        assert history[busy.id].preview == "hey there"
        assert history[busy.id].unread == 1
        # the conversation with the latest activity is listed first
        assert service.list_history("user-1")[0].id == busy.id

    def test_mark_read_resets_unread_count(self, db, user):
        service = ConversationService(db)
        messages = MessageService(db)
        conversation = service.create_conversation("user-1", ["casual"], ROSTER)
        messages.append_message(conversation.id, SenderType.AGENT, "casual", "one")

        service.mark_read("user-1", conversation.id)
        assert service.list_history("user-1")[0].unread == 0

        messages.append_message(conversation.id, SenderType.AGENT, "casual", "two")
        assert service.list_history("user-1")[0].unread == 1

    def test_blank_title_is_rejected(self, db, user):
        service = ConversationService(db)
        conversation = service.create_conversation("user-1", ["creative"], ROSTER)

        with pytest.raises(ValidationError):
            service.update_title("user-1", conversation.id, "   ")

        assert service.update_title("user-1", conversation.id, " Launch plan ").title == "Launch plan"

    def test_delete_removes_messages(self, db, user):
        service = ConversationService(db)
        conversation = service.create_conversation("user-1", ["creative"], ROSTER)
        MessageService(db).append_message(conversation.id, SenderType.USER, "user-1", "hi")

        service.delete_conversation("user-1", conversation.id)

        assert db.query(Conversation).count() == 0
        assert db.query(Message).count() == 0


class TestMessageService:
    def test_messages_are_listed_oldest_first(self, db, user):
        conversation = ConversationService(db).create_conversation("user-1", ["casual"], ROSTER)
        service = MessageService(db)
        for content in ["first", "second", "third"]:
            service.append_message(conversation.id, SenderType.USER, "user-1", content)

        assert [m.content for m in service.list_messages(conversation.id)] == ["first", "second", "third"]

    def test_format_resolves_agents_and_marks_unknown_ones(self, db, user):
        conversation = ConversationService(db).create_conversation("user-1", ["casual"], ROSTER)
        service = MessageService(db)
        service.append_message(conversation.id, SenderType.USER, "user-1", "hi")
        service.append_message(conversation.id, SenderType.AGENT, "casual", "hey")
        service.append_message(conversation.id, SenderType.AGENT, "deleted-agent", "boo")

        user_msg, known, unknown = service.format_messages(service.list_messages(conversation.id), ROSTER)

        assert user_msg.type == SenderType.USER
        assert user_msg.agent is None
        assert known.agent.name == "Casual Buddy"
        assert known.agent.color == "bg-green-500"
        assert unknown.agent.id == "deleted-agent"
        assert unknown.agent.name == "Unknown Agent"
        assert unknown.agent.avatar == "🤖"


def chat_service(db, generator=None, rng=None):
    generator = generator or StubGenerator()
    orchestrator = Orchestrator(generator, selector=ResponseSelector(rng or AlwaysRandom(0.0)))
    return ChatService(db, orchestrator)


def send(service, **fields):
    return asyncio.run(service.send_message("user-1", TurnRequest(**fields)))


class TestChatService:
    def test_first_message_creates_conversation_and_stores_turn(self, db, user):
        generator = StubGenerator(replies={"creative expert": "Go bold!", "casual enthusiast": "Sounds fun"})
        service = chat_service(db, generator)

        response = send(service, message="Plan my launch", active_agents=["creative", "casual"])

        assert [a.agent_id for a in response.agents] == ["creative", "casual"]
        assert response.total_agents == 2
        assert response.responding_agents == 2

        conversation = db.query(Conversation).one()
        assert response.conversation_id == conversation.id
        assert conversation.type == ConversationType.GROUP.value
        stored = MessageService(db).list_messages(conversation.id)
        assert [(m.sender_type, m.sender_id, m.content) for m in stored] == [
            ("user", "user-1", "Plan my launch"),
            ("agent", "creative", "Go bold!"),
            ("agent", "casual", "Sounds fun"),
        ]

    def test_failed_agents_are_not_stored(self, db, user):
        generator = StubGenerator(failures=["creative expert"])
        service = chat_service(db, generator)

        response = send(service, message="hi", active_agents=["creative", "casual"])

        assert [a.agent_id for a in response.agents] == ["casual"]
        assert response.responding_agents == 2
        stored = MessageService(db).list_messages(response.conversation_id)
        assert [m.sender_id for m in stored] == ["user-1", "casual"]

    def test_follow_up_updates_active_agents(self, db, user):
        service = chat_service(db)
        first = send(service, message="hi", active_agents=["creative"])

        second = send(service, message="and you?", active_agents=["analytical"], conversation_id=first.conversation_id)

        assert second.conversation_id == first.conversation_id
        assert [a.agent_id for a in second.agents] == ["analytical"]
        assert db.query(Conversation).one().agents == ["analytical"]

    def test_follow_up_without_agents_keeps_existing_ones(self, db, user):
        service = chat_service(db)
        first = send(service, message="hi", active_agents=["creative", "casual"])

        second = send(service, message="again", conversation_id=first.conversation_id)

        assert [a.agent_id for a in second.agents] == ["creative", "casual"]

    def test_custom_agents_take_part_in_turns(self, db, user):
        custom = AgentService(db).create_custom_agent("user-1", "Poet", "lyrical", response_rate=1.0)
        generator = StubGenerator(replies={"You are Poet. lyrical.": "Roses are red"})
        service = chat_service(db, generator)

        response = send(service, message="Write a tagline", active_agents=[custom.id])

        assert response.agents[0].agent_name == "Poet"
        assert response.agents[0].response == "Roses are red"
        assert db.query(Conversation).one().title == "Poet"

    def test_empty_message_is_rejected_before_anything_is_stored(self, db, user):
        with pytest.raises(ValidationError):
            send(chat_service(db), message="   ", active_agents=["creative"])

        assert db.query(Conversation).count() == 0
        assert db.query(Message).count() == 0

    def test_unknown_agent_is_rejected(self, db, user):
        with pytest.raises(NotFoundError):
            send(chat_service(db), message="hi", active_agents=["creative", "ghost"])

    def test_unknown_conversation_is_rejected(self, db, user):
        with pytest.raises(NotFoundError):
            send(chat_service(db), message="hi", conversation_id="conv-missing")

    def test_unconfigured_backend_keeps_the_user_message(self, db, user):
        service = ChatService(db, Orchestrator(None))

        with pytest.raises(ConfigurationError):
            send(service, message="hi", active_agents=["creative"])

        assert [m.sender_type for m in db.query(Message).all()] == ["user"]

    def test_get_messages_formats_stored_turn(self, db, user):
        service = chat_service(db)
        response = send(service, message="hi", active_agents=["minimalist"])

        messages = service.get_messages("user-1", response.conversation_id)

        assert [m.type for m in messages] == [SenderType.USER, SenderType.AGENT]
        assert messages[1].agent.name == "Short & Sweet"
