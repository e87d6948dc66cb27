"""
Pytest configuration and fixtures for the avatar relay tests.

Provides a Flask test client, a clean session store for every test, and a
zero reply delay so send-message tests do not sleep.
"""

import pytest
from unittest.mock import MagicMock

from core import clear_sessions
from models import ChatMessage, ChatUser


@pytest.fixture(autouse=True)
def reset_sessions():
    """Every test starts and ends with an empty session store."""
    clear_sessions()
    yield
    clear_sessions()


@pytest.fixture(autouse=True)
def no_reply_delay(monkeypatch):
    monkeypatch.setattr("routes.relay.BOT_REPLY_DELAY_SECONDS", 0)


@pytest.fixture
def client():
    from server import app
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client


def make_message(msg_id, user_id, created_at, text=None, conversation_id="conv_1", payload=None):
    """Build a ChatMessage the way the Chat API would describe it."""
    if payload is None:
        payload = {"type": "text", "text": text}
    return ChatMessage(
        id=msg_id,
        conversation_id=conversation_id,
        user_id=user_id,
        created_at=created_at,
        payload=payload,
    )


@pytest.fixture
def fake_botpress():
    """
    A MagicMock standing in for BotpressClient: one user, one conversation,
    and a bot that has answered the user's message.
    """
    bp = MagicMock()
    bp.configured = True
    bp.connect.return_value = ChatUser(id="user_1", key="uk_secret_1")
    bp.create_conversation.return_value = "conv_1"
    bp.create_message.return_value = make_message(
        "msg_2", "user_1", "2024-05-01T10:00:02.000Z", "Hello bot"
    )
    bp.list_messages.return_value = [
        make_message("msg_3", "bot_1", "2024-05-01T10:00:03.000Z", "Hi! How can I help?"),
        make_message("msg_2", "user_1", "2024-05-01T10:00:02.000Z", "Hello bot"),
        make_message("msg_1", "bot_1", "2024-05-01T10:00:00.000Z", "Welcome!"),
    ]
    return bp


def mock_response(status_code=200, json_data=None, json_error=None):
    """A stand-in for requests.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = json_data
    return resp
