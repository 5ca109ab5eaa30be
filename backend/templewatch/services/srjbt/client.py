"""Booking API client: lowest level, sends request only. No validation of response bodies."""
import logging
from typing import Any

import httpx

from templewatch.core.constants import CLIENT_TOKEN_HEADER, UPSTREAM_TOKEN_HEADER
from templewatch.core.errors import MSG_TOKEN_REQUIRED, Unauthorized, UpstreamUnavailable
from templewatch.models.slot import ResourceKind
from templewatch.services.srjbt.config import SrjbtConfig

logger = logging.getLogger(__name__)


class SrjbtClient:
    """Darshan/aarti summary + detail reads and the OTP login calls."""

    def __init__(
        self,
        token: str,
        config: SrjbtConfig | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._token = (token or "").strip()
        self._config = config or SrjbtConfig()
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self._config.timeout, transport=self._transport)

    def _send(self, method: str, path: str, *, json_body: dict[str, Any] | None = None, require_token: bool = True) -> httpx.Response:
        if require_token and not self._token:
            # An empty header is accepted upstream as anonymous; never send one
            raise Unauthorized(MSG_TOKEN_REQUIRED)
        url = f"{self._config.base_url}{path}"
        try:
            with self._client() as c:
                r = c.request(method, url, json=json_body, headers=self._config.headers(self._token))
        except httpx.HTTPError as e:
            raise UpstreamUnavailable(f"Booking API request failed: {e}") from e
        if r.status_code == 401:
            raise Unauthorized()
        if not r.is_success:
            raise UpstreamUnavailable(_error_message(r), status_code=r.status_code)
        return r

    def _json(self, r: httpx.Response) -> Any:
        if not r.content:
            return None
        try:
            return r.json()
        except ValueError as e:
            raise UpstreamUnavailable(f"Booking API returned malformed JSON: {r.text[:200]}", status_code=r.status_code) from e

    def fetch_summary(self, kind: ResourceKind) -> dict[str, Any] | None:
        """Dates with open inventory for kind. None when the API answers with an empty body."""
        return self._json(self._send("GET", self._config.summary_path(kind)))

    def fetch_detail(self, kind: ResourceKind, date_key: str) -> dict[str, Any] | None:
        """Slot listing for one date. date_key is passed through in the API's own format."""
        return self._json(self._send("GET", self._config.detail_path(kind, date_key)))

    def send_otp(self, payload: dict[str, Any]) -> dict[str, Any]:
        """POST /account/resendOtp. The token header is attached only when we have one."""
        r = self._send("POST", "/account/resendOtp", json_body=payload, require_token=False)
        return self._json(r) or {}

    def validate_otp(self, payload: dict[str, Any]) -> tuple[dict[str, Any], str | None]:
        """
        POST /account/validateOtp. Returns (body, token). The token comes from the response
        header when present, otherwise from the body; header wins.
        """
        r = self._send("POST", "/account/validateOtp", json_body=payload, require_token=False)
        body = self._json(r) or {}
        token = r.headers.get(UPSTREAM_TOKEN_HEADER) or r.headers.get(CLIENT_TOKEN_HEADER)
        if not token and isinstance(body, dict):
            token = body.get("authToken") or body.get("token")
        return body, (token.strip() if isinstance(token, str) and token.strip() else None)


def _error_message(r: httpx.Response) -> str:
    """Upstream's own message field when the error body is JSON, else a generic line with the status."""
    try:
        data = r.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return f"Booking API error: {r.status_code}"
