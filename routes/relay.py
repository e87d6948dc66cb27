"""
Relay endpoints as a Flask Blueprint.

POST /api/start-session     → {"sessionId": "..."}
POST /api/sendMessage       {"sessionId", "userText"} → {"botResponseText": "..."}
POST /api/get-heygen-token  → {"token": "..."}
POST /api/end-session       {"sessionId"} → {"ok": true}
"""

import time

from flask import Blueprint, request, jsonify

from app_config import BOT_REPLY_DELAY_SECONDS
from services import BotpressClient, HeyGenClient
from core import (
    create_session,
    get_session,
    end_session,
    missing_fields,
    latest_bot_reply,
)
from chat_logger import get_logger, truncate_for_log

logger = get_logger()

relay_bp = Blueprint("relay", __name__, url_prefix="/api")

botpress_client = BotpressClient()
heygen_client = HeyGenClient()


def _json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _log_id(value) -> str:
    """Sanitized form of a client-supplied id for a log line."""
    if value is None:
        return "<none>"
    if not isinstance(value, str):
        return f"<{type(value).__name__}>"
    return truncate_for_log(value, limit=64)


def _error(message: str, status: int):
    return jsonify({"error": message}), status


@relay_bp.route("/start-session", methods=["POST"])
def start_session():
    """Create a Botpress user and conversation and hand back an opaque session id."""
    try:
        user = botpress_client.connect()
        conversation_id = botpress_client.create_conversation(user.key)
        session_id = create_session(user.key, conversation_id, user_id=user.id)
    except Exception:
        logger.exception("POST /api/start-session | Failed to start session")
        return _error("Failed to start session", 500)

    logger.info(f"POST /api/start-session | session={session_id} | conversation={conversation_id}")
    return jsonify({"sessionId": session_id})


@relay_bp.route("/sendMessage", methods=["POST"])
def send_message():
    """
    Forward the user's text to the conversation and relay the bot's reply.

    The reply is read after a fixed delay; if the bot has not answered by
    then, botResponseText is an empty string.
    """
    start_time = time.time()
    body = _json_body()

    if missing_fields(body, "sessionId", "userText"):
        logger.warning("POST /api/sendMessage | Missing sessionId or userText")
        return _error("sessionId and userText are required", 400)

    session_id = body["sessionId"]
    user_text = body["userText"]
    if not isinstance(session_id, str) or not isinstance(user_text, str):
        logger.warning("POST /api/sendMessage | sessionId and userText must be strings")
        return _error("sessionId and userText are required", 400)

    log_id = _log_id(session_id)
    record = get_session(session_id)
    if record is None:
        logger.warning(f"POST /api/sendMessage | session={log_id} | Session not found")
        return _error("Session not found", 400)

    logger.info(
        f'POST /api/sendMessage | session={log_id} | userText="{truncate_for_log(user_text)}"'
    )

    try:
        sent = botpress_client.create_message(record.user_key, record.conversation_id, user_text)
        time.sleep(BOT_REPLY_DELAY_SECONDS)
        messages = botpress_client.list_messages(record.user_key, record.conversation_id)
        author_id = record.user_id or sent.user_id
        bot_response_text = latest_bot_reply(messages, author_id, since=sent.created_at or None)
    except Exception:
        logger.exception(f"POST /api/sendMessage | session={log_id} | Failed to send message")
        return _error("Failed to send message", 500)

    elapsed_ms = int((time.time() - start_time) * 1000)
    if not bot_response_text:
        logger.warning(
            f"POST /api/sendMessage | session={log_id} | No bot reply after "
            f"{BOT_REPLY_DELAY_SECONDS}s"
        )
    logger.info(
        f"POST /api/sendMessage | session={log_id} | messages={len(messages)} | "
        f'botResponseText="{truncate_for_log(bot_response_text)}" | response_time_ms={elapsed_ms}'
    )
    return jsonify({"botResponseText": bot_response_text})


@relay_bp.route("/get-heygen-token", methods=["POST"])
def get_heygen_token():
    """Issue a streaming token so the API key never reaches the browser."""
    try:
        token = heygen_client.create_streaming_token()
    except Exception:
        logger.exception("POST /api/get-heygen-token | Failed to get HeyGen token")
        return _error("Failed to get HeyGen token", 500)

    logger.info("POST /api/get-heygen-token | token issued")
    return jsonify({"token": token})


@relay_bp.route("/end-session", methods=["POST"])
def end_session_route():
    """Forget a session. Unknown ids are not an error."""
    try:
        session_id = _json_body().get("sessionId")
        removed = end_session(session_id) if isinstance(session_id, str) else False
    except Exception:
        logger.exception("POST /api/end-session | Failed to end session")
        return _error("Failed to end session", 500)

    logger.info(f"POST /api/end-session | session={_log_id(session_id)} | removed={removed}")
    return jsonify({"ok": True})
