"""
Exceptions raised by the upstream API clients.
"""

from typing import Optional


class UpstreamError(Exception):
    """A call to a third-party API failed or returned something unusable."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BotpressError(UpstreamError):
    pass


class HeyGenError(UpstreamError):
    pass
