"""
The single bearer token used for every booking API call.

Resolution order: explicit per-request value > browser cookie > token stored in this process
(OTP login or manual entry) > API_TOKEN from settings. Nothing resolvable raises Unauthorized;
an empty string is never handed to the client.
"""
import logging
import threading

from templewatch.config import settings
from templewatch.core.errors import MSG_TOKEN_REQUIRED, Unauthorized

logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str:
    return (value or "").strip()


class TokenStore:
    def __init__(self, fallback: str | None = None) -> None:
        self._fallback = _clean(settings.api_token if fallback is None else fallback)
        self._stored = ""
        self._lock = threading.Lock()

    def set(self, token: str) -> None:
        token = _clean(token)
        if not token:
            raise ValueError("token must be non-empty")
        with self._lock:
            self._stored = token
        logger.info("Auth token updated (%s...)", token[:6])

    def clear(self) -> None:
        with self._lock:
            self._stored = ""

    @property
    def stored(self) -> str | None:
        return self._stored or None

    def resolve(self, explicit: str | None = None, cookie: str | None = None) -> str:
        """Active token per precedence. Raises Unauthorized when there is none."""
        for candidate in (explicit, cookie, self._stored, self._fallback):
            token = _clean(candidate)
            if token:
                return token
        raise Unauthorized(MSG_TOKEN_REQUIRED)

    def has_token(self, explicit: str | None = None, cookie: str | None = None) -> bool:
        try:
            self.resolve(explicit, cookie)
        except Unauthorized:
            return False
        return True
