"""Core package - exports core functionality."""

from .session import (
    sessions,
    generate_session_id,
    create_session,
    get_session,
    session_exists,
    end_session,
    clear_sessions,
)
from .helpers import (
    missing_fields,
    latest_bot_reply,
)

__all__ = [
    "sessions",
    "generate_session_id",
    "create_session",
    "get_session",
    "session_exists",
    "end_session",
    "clear_sessions",
    "missing_fields",
    "latest_bot_reply",
]
