"""
Data models for the avatar relay.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class SessionRecord:
    """What the relay remembers about one front-end session."""
    user_key: str
    conversation_id: str
    user_id: str = ""
    created_at: str = field(default_factory=_utc_now)


@dataclass
class ChatUser:
    id: str
    key: str


@dataclass
class ChatMessage:
    id: str
    conversation_id: str
    user_id: str
    created_at: str
    payload: dict = field(default_factory=dict)

    @property
    def text(self) -> Optional[str]:
        if not isinstance(self.payload, dict):
            return None
        text = self.payload.get("text")
        return text if isinstance(text, str) else None

    @classmethod
    def from_api(cls, data: dict) -> "ChatMessage":
        """Build a message from a Chat API message object."""
        return cls(
            id=data.get("id", ""),
            conversation_id=data.get("conversationId", ""),
            user_id=data.get("userId", ""),
            created_at=data.get("createdAt", ""),
            payload=data.get("payload") or {},
        )
