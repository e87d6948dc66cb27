"""
HTTP client for the Botpress Chat API.

Every call goes to ``{base_url}/{webhook_id}``; calls made on behalf of a
user carry that user's key in the ``x-user-key`` header.
"""

import time
from typing import List, Optional

import requests as http_requests

from app_config import (
    BOTPRESS_WEBHOOK_ID,
    BOTPRESS_CHAT_URL,
    REQUEST_TIMEOUT,
    JSON_HEADERS,
)
from models import ChatUser, ChatMessage
from chat_logger import get_logger, mask_secret
from services.errors import BotpressError

logger = get_logger()

# Upper bound on pages followed when listing a conversation's messages.
MAX_MESSAGE_PAGES = 20


def _object(data: dict, key: str) -> dict:
    """Return a nested JSON object, or an empty dict when absent or malformed."""
    value = data.get(key)
    return value if isinstance(value, dict) else {}


class BotpressClient:
    """Connects users, opens conversations and exchanges messages."""

    def __init__(
        self,
        webhook_id: str = BOTPRESS_WEBHOOK_ID,
        base_url: str = BOTPRESS_CHAT_URL,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.webhook_id = webhook_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self.session = http_requests.Session()
        self.session.headers.update(JSON_HEADERS)

    @property
    def configured(self) -> bool:
        return bool(self.webhook_id)

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{self.webhook_id}{path}"

    def _request(
        self,
        method: str,
        path: str,
        user_key: Optional[str] = None,
        json: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> dict:
        """Send one Chat API request and return the decoded JSON body."""
        if not self.configured:
            raise BotpressError("BOTPRESS_WEBHOOK_ID is not configured")

        headers = {"x-user-key": user_key} if user_key else {}
        logger.info(
            f"Botpress API request: {method} {path} | user_key={mask_secret(user_key)}"
        )
        start_time = time.time()

        try:
            resp = self.session.request(
                method=method,
                url=self._url(path),
                headers=headers,
                json=json,
                params=params,
                timeout=self.timeout,
            )
        except http_requests.exceptions.RequestException as e:
            logger.error(f"Botpress API request failed: {method} {path} | error={e}")
            raise BotpressError(f"Botpress request failed: {e}") from e

        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"Botpress API response: {method} {path} | status={resp.status_code} | "
            f"response_time_ms={elapsed_ms}"
        )

        if not resp.ok:
            raise BotpressError(
                f"Botpress returned HTTP {resp.status_code} for {method} {path}",
                status_code=resp.status_code,
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise BotpressError(
                f"Botpress returned a non-JSON body for {method} {path}",
                status_code=resp.status_code,
            ) from e
        if not isinstance(data, dict):
            raise BotpressError(
                f"Botpress returned a non-object body for {method} {path}",
                status_code=resp.status_code,
            )
        return data

    # ─── Users ───

    def connect(self, user_key: Optional[str] = None) -> ChatUser:
        """
        Connect to the chat integration.

        Without a key a new user is created; with a key the existing user is
        looked up so its id can be compared against message authors.
        """
        if user_key:
            data = self._request("GET", "/users/me", user_key=user_key)
            user = _object(data, "user")
            key = user_key
        else:
            data = self._request("POST", "/users", json={})
            user = _object(data, "user")
            key = data.get("key")

        if not user.get("id") or not key:
            raise BotpressError("Botpress did not return a user id and key")
        return ChatUser(id=user["id"], key=key)

    # ─── Conversations ───

    def create_conversation(self, user_key: str) -> str:
        data = self._request("POST", "/conversations", user_key=user_key, json={})
        conversation_id = _object(data, "conversation").get("id")
        if not conversation_id:
            raise BotpressError("Botpress did not return a conversation id")
        return conversation_id

    # ─── Messages ───

    def create_message(self, user_key: str, conversation_id: str, text: str) -> ChatMessage:
        data = self._request(
            "POST",
            "/messages",
            user_key=user_key,
            json={
                "conversationId": conversation_id,
                "payload": {"type": "text", "text": text},
            },
        )
        message = _object(data, "message")
        if not message:
            raise BotpressError("Botpress did not return the created message")
        return ChatMessage.from_api(message)

    def list_messages(self, user_key: str, conversation_id: str) -> List[ChatMessage]:
        """List every message of a conversation, following pagination."""
        messages: List[ChatMessage] = []
        next_token = None

        for _ in range(MAX_MESSAGE_PAGES):
            params = {"nextToken": next_token} if next_token else None
            data = self._request(
                "GET",
                f"/conversations/{conversation_id}/messages",
                user_key=user_key,
                params=params,
            )
            page = data.get("messages") or []
            if not isinstance(page, list):
                raise BotpressError("Botpress returned a malformed message list")
            messages.extend(ChatMessage.from_api(m) for m in page if isinstance(m, dict))
            next_token = _object(data, "meta").get("nextToken")
            if not next_token:
                break
        else:
            logger.warning(
                f"Stopped listing messages after {MAX_MESSAGE_PAGES} pages | "
                f"conversation={conversation_id}"
            )

        return messages
