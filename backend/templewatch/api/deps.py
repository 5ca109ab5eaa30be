"""Request-scoped dependencies: the app's orchestrator and the caller-supplied token sources."""
from fastapi import Cookie, Header, Request

from templewatch.core.constants import TOKEN_COOKIE_NAME
from templewatch.orchestrator.orchestrator import PollOrchestrator


def get_orchestrator(request: Request) -> PollOrchestrator:
    return request.app.state.orchestrator


class CallerToken:
    """Token candidates from one request: explicit header first, then the browser cookie."""

    __slots__ = ("explicit", "cookie")

    def __init__(self, explicit: str | None, cookie: str | None) -> None:
        self.explicit = explicit
        self.cookie = cookie


def caller_token(
    x_auth_token: str | None = Header(None, alias="x-auth-token"),
    tof_auth_token: str | None = Header(None, alias="tof-auth-token"),
    auth_token: str | None = Cookie(None, alias=TOKEN_COOKIE_NAME),
) -> CallerToken:
    return CallerToken(explicit=x_auth_token or tof_auth_token, cookie=auth_token)
