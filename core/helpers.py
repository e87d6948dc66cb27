"""
Helper functions for request validation and reply selection.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from models import ChatMessage

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def missing_fields(body: dict, *names: str) -> List[str]:
    """
    Return the required field names that are absent or blank in a JSON body.

    A value counts as missing when it is absent, None, or a string that is
    empty after stripping whitespace.
    """
    missing = []
    for name in names:
        value = (body or {}).get(name)
        if value is None:
            missing.append(name)
        elif isinstance(value, str) and not value.strip():
            missing.append(name)
    return missing


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp such as ``2024-05-01T10:00:02.5Z``.

    Returns an aware UTC datetime, or None when the value is empty or
    unparseable. Naive timestamps are taken to be UTC.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    # fromisoformat before 3.11 only takes 3 or 6 fractional digits
    if "." in text:
        head, _, rest = text.partition(".")
        digits = ""
        while rest and rest[0].isdigit():
            digits, rest = digits + rest[0], rest[1:]
        text = f"{head}.{(digits + '000000')[:6]}{rest}"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def latest_bot_reply(
    messages: Iterable[ChatMessage],
    user_id: str,
    since: Optional[str] = None,
) -> str:
    """
    Pick the text of the newest message not written by ``user_id``.

    Messages are ordered by their parsed ``created_at``, so neither the order
    the API returns them in nor the timestamp precision matters. When
    ``since`` is given, only messages created after it are considered,
    which keeps an older bot reply from being relayed again.
    Messages without text (cards, images, ...) are skipped.
    """
    cutoff = parse_timestamp(since)
    ordered = sorted(messages, key=lambda m: parse_timestamp(m.created_at) or _EPOCH)
    for message in reversed(ordered):
        if cutoff and (parse_timestamp(message.created_at) or _EPOCH) <= cutoff:
            break
        if message.user_id == user_id:
            continue
        if message.text:
            return message.text
    return ""
