"""
Session Management

In-memory store mapping an opaque session id to the Botpress user and
conversation behind it. Nothing is persisted; a restart forgets every session.
"""

import secrets
from typing import Dict, Optional

from models import SessionRecord

# In-memory session store
sessions: Dict[str, SessionRecord] = {}

SESSION_ID_BYTES = 16


def generate_session_id() -> str:
    """Return a fresh URL-safe id that is not already in the store."""
    while True:
        session_id = secrets.token_urlsafe(SESSION_ID_BYTES)
        if session_id not in sessions:
            return session_id


def create_session(user_key: str, conversation_id: str, user_id: str = "") -> str:
    """Store a new session and return its id."""
    session_id = generate_session_id()
    sessions[session_id] = SessionRecord(
        user_key=user_key,
        conversation_id=conversation_id,
        user_id=user_id,
    )
    return session_id


def get_session(session_id: str) -> Optional[SessionRecord]:
    """Get session by ID. Returns None if not found."""
    if not session_id:
        return None
    return sessions.get(session_id)


def session_exists(session_id: str) -> bool:
    """Check if a session exists."""
    return bool(session_id) and session_id in sessions


def end_session(session_id: str) -> bool:
    """Forget a session. Returns True if one was removed."""
    if not session_id:
        return False
    return sessions.pop(session_id, None) is not None


def clear_sessions() -> None:
    sessions.clear()
