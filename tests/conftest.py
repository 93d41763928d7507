"""Shared fixtures: in-memory database, stub generation backend, auth tokens."""

import asyncio
import os
import random

# Settings are read once at import time, so the test environment goes first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["OPENAI_API_KEY"] = ""

import jwt
import pytest
from fastapi.testclient import TestClient

from agentchat.ai.orchestrator import Orchestrator
from agentchat.ai.schemas import Agent
from agentchat.ai.selector import ResponseSelector
from agentchat.api.dependencies import get_orchestrator
from agentchat.database import Base, SessionLocal, engine
from agentchat.main import app
from agentchat.models.user import User


class AlwaysRandom(random.Random):
    """Random source pinned to one value, to make selection deterministic."""

    def __init__(self, value: float = 0.0):
        super().__init__()
        self.value = value

    def random(self) -> float:
        return self.value


class StubGenerator:
    """Generation backend that answers from a script keyed by prompt substrings.

    The first key found in the prompt decides the behaviour: a delay before
    answering, a failure, or a fixed reply. Unmatched prompts get a default reply.
    """

    def __init__(self, replies=None, delays=None, failures=(), default="Sounds great!"):
        self.replies = dict(replies or {})
        self.delays = dict(delays or {})
        self.failures = set(failures)
        self.default = default
        self.prompts = []

    def _key(self, prompt: str):
        keys = list(self.replies) + list(self.delays) + list(self.failures)
        return next((k for k in keys if k in prompt), None)

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        key = self._key(prompt)
        if key in self.delays:
            await asyncio.sleep(self.delays[key])
        if key in self.failures:
            raise RuntimeError(f"quota exceeded for {key}")
        return self.replies.get(key, self.default)


def make_agent(agent_id: str, response_rate: float = 1.0, **overrides) -> Agent:
    fields = {
        "id": agent_id,
        "name": agent_id.upper(),
        "avatar": "🤖",
        "color": "bg-gray-500",
        "personality": f"{agent_id} personality",
        "system_prompt": f"You are agent {agent_id}.",
        "response_rate": response_rate,
    }
    fields.update(overrides)
    return Agent(**fields)


def auth_headers(user_id: str = "user-1", email: str = "user@example.com") -> dict:
    token = jwt.encode(
        {"sub": user_id, "email": email, "aud": "authenticated"},
        "test-secret",
        algorithm="HS256",
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(tables):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db):
    record = User(id="user-1", email="user@example.com")
    db.add(record)
    db.commit()
    return record


@pytest.fixture
def stub_generator():
    return StubGenerator()


@pytest.fixture
def orchestrator(stub_generator):
    """Orchestrator that selects every agent with a non-zero response rate."""
    return Orchestrator(stub_generator, selector=ResponseSelector(AlwaysRandom(0.0)))


@pytest.fixture
def client(tables, orchestrator):
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def headers():
    return auth_headers()
