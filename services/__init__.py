"""Services package - exports the upstream API clients."""

from .errors import UpstreamError, BotpressError, HeyGenError
from .botpress_client import BotpressClient
from .heygen_client import HeyGenClient

__all__ = [
    "UpstreamError",
    "BotpressError",
    "HeyGenError",
    "BotpressClient",
    "HeyGenClient",
]
