# agentchat/models/enums.py
import enum


class ConversationType(str, enum.Enum):
    SINGLE = "single"
    GROUP = "group"


class SenderType(str, enum.Enum):
    USER = "user"
    AGENT = "agent"
    SYSTEM = "system"
