"""Booking API config. Base URL and temple id from settings; the token is supplied per client."""
from templewatch.config import settings
from templewatch.core.constants import UPSTREAM_TOKEN_HEADER
from templewatch.models.slot import ResourceKind


class SrjbtConfig:
    """Base URL, endpoint paths and request headers for the temple booking API."""

    __slots__ = ("base_url", "darshan_temple_id", "timeout")

    def __init__(
        self,
        *,
        base_url: str | None = None,
        darshan_temple_id: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = (base_url or settings.upstream_base_url).rstrip("/")
        self.darshan_temple_id = (darshan_temple_id or settings.darshan_temple_id).strip()
        self.timeout = timeout if timeout is not None else settings.upstream_timeout_seconds

    def summary_path(self, kind: ResourceKind) -> str:
        if kind is ResourceKind.DARSHAN:
            return f"/eDarshan/darshansummary/{self.darshan_temple_id}"
        return "/eAarti/aartiSummary"

    def detail_path(self, kind: ResourceKind, date_key: str) -> str:
        """date_key goes through in the upstream's own format (e.g. 2026-10-8)."""
        if kind is ResourceKind.DARSHAN:
            return f"/eDarshan/darshanAvailability/{date_key}/{self.darshan_temple_id}"
        return f"/eAarti/aartiAvailability/{date_key}"

    def headers(self, token: str | None) -> dict[str, str]:
        h = {"Content-Type": "application/json", "Accept": "application/json"}
        if token:
            h[UPSTREAM_TOKEN_HEADER] = token
        return h
