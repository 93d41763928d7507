# agentchat/models/mixins.py
from datetime import datetime, timezone
import time
import uuid

from sqlalchemy import Column, DateTime
from sqlalchemy.sql import func


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_id(prefix: str) -> str:
    """
    Generate a prefixed string primary key, e.g. ``msg-1760000000000000000-3f9a1c2be``.

    The nanosecond timestamp keeps ids sortable by creation time, which is
    used as a tie-breaker when two rows share a ``created_at`` value.
    """
    return f"{prefix}-{time.time_ns()}-{uuid.uuid4().hex[:9]}"


class TimestampMixin:
    """Mixin to add created_at and updated_at columns to models"""
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False)
