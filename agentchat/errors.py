# agentchat/errors.py
"""
Domain errors raised by the services and the turn engine.

Each error carries the HTTP status it maps to and a short machine-readable
code, so the API layer can translate them without inspecting messages.
"""
from typing import Optional


class AgentChatError(Exception):
    """Base class for errors surfaced to API clients"""
    status_code: int = 500
    code: str = "internal_error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(AgentChatError):
    """The request is malformed, e.g. an empty message"""
    status_code = 400
    code = "validation_error"


class NotFoundError(AgentChatError):
    """A referenced conversation or agent does not exist for the requesting user"""
    status_code = 404
    code = "not_found"


class ConfigurationError(AgentChatError):
    """The generation backend is not configured; fatal for the whole turn"""
    status_code = 503
    code = "configuration_error"


class AgentCallFailure(Exception):
    """
    A single agent's generation call failed.

    Never raised across the turn boundary: the responder records it on the
    call result and the orchestrator keeps it for logging only.
    """

    def __init__(self, agent_id: str, reason: str, cause: Optional[BaseException] = None):
        super().__init__(f"Agent {agent_id} failed: {reason}")
        self.agent_id = agent_id
        self.reason = reason
        self.cause = cause
