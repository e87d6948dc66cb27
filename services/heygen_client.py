"""
HeyGen API client. The relay only needs streaming tokens, so the front-end
can start an avatar session without ever seeing the API key.
"""

import time

import requests as http_requests

from app_config import HEYGEN_API_KEY, HEYGEN_API_URL, REQUEST_TIMEOUT, JSON_HEADERS
from chat_logger import get_logger
from services.errors import HeyGenError

logger = get_logger()

CREATE_TOKEN_PATH = "/v1/streaming.create_token"


class HeyGenClient:
    """Issues short-lived streaming tokens using the server-side API key."""

    def __init__(
        self,
        api_key: str = HEYGEN_API_KEY,
        base_url: str = HEYGEN_API_URL,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self.session = http_requests.Session()
        self.session.headers.update(JSON_HEADERS)

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def create_streaming_token(self) -> str:
        """Create a streaming token and return it."""
        if not self.configured:
            raise HeyGenError("HEYGEN_API_KEY is not configured")

        logger.info(f"HeyGen API request: POST {CREATE_TOKEN_PATH}")
        start_time = time.time()

        try:
            resp = self.session.post(
                f"{self.base_url}{CREATE_TOKEN_PATH}",
                headers={"x-api-key": self.api_key},
                timeout=self.timeout,
            )
        except http_requests.exceptions.RequestException as e:
            logger.error(f"HeyGen API request failed: {e}")
            raise HeyGenError(f"HeyGen request failed: {e}") from e

        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"HeyGen API response: status={resp.status_code} | response_time_ms={elapsed_ms}"
        )

        if not resp.ok:
            raise HeyGenError(
                f"HeyGen returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )
        try:
            body = resp.json()
        except ValueError as e:
            raise HeyGenError("HeyGen returned a non-JSON body", status_code=resp.status_code) from e

        if not isinstance(body, dict):
            raise HeyGenError("HeyGen returned a non-object body", status_code=resp.status_code)

        data = body.get("data")
        token = data.get("token") if isinstance(data, dict) else None
        if not token or not isinstance(token, str):
            raise HeyGenError("HeyGen response did not contain a token", status_code=resp.status_code)
        return token
