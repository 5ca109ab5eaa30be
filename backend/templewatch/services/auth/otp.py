"""
Two-step OTP login against the booking API: email -> user id + code by mail -> token.

States: AWAITING_EMAIL -> AWAITING_CODE -> AUTHENTICATED. A wrong code keeps the session in
AWAITING_CODE so the user can retry; reset() goes back to AWAITING_EMAIL. On success the token is
written to the TokenStore and the session's user id is discarded.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from templewatch.core.constants import OTP_TYPE_RESEND
from templewatch.core.errors import UpstreamUnavailable
from templewatch.services.auth.token_store import TokenStore
from templewatch.services.srjbt.client import SrjbtClient

logger = logging.getLogger(__name__)


class OtpState(str, Enum):
    AWAITING_EMAIL = "awaiting_email"
    AWAITING_CODE = "awaiting_code"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class OtpResult:
    success: bool
    token: str | None = None
    status_message: str | None = None
    body: dict[str, Any] | None = None


def send_otp_payload(email: str, *, otp_type: str = OTP_TYPE_RESEND, email_flag: int = 1, aarti_flag: int = 1) -> dict[str, Any]:
    return {"emailId": email.strip(), "otpType": otp_type, "emailFlag": email_flag, "aartiFlag": aarti_flag}


def validate_otp_payload(user_id: str, otp: str, *, otp_type: str = OTP_TYPE_RESEND) -> dict[str, Any]:
    return {"userId": user_id, "otp": otp.strip(), "otpType": otp_type}


def request_code(client: SrjbtClient, payload: dict[str, Any]) -> dict[str, Any]:
    """Ask the booking API to mail a code. Raises UpstreamUnavailable if no userId comes back."""
    body = client.send_otp(payload)
    if not body.get("userId"):
        raise UpstreamUnavailable(body.get("statusMessage") or "No userId returned from server")
    return body


def submit_code(client: SrjbtClient, payload: dict[str, Any]) -> OtpResult:
    body, token = client.validate_otp(payload)
    success = bool(body.get("loginSuccess"))
    return OtpResult(success=success, token=token if success else None, status_message=body.get("statusMessage"), body=body)


class OtpSession:
    """One login attempt. Use a fresh session (or reset()) per dialog."""

    def __init__(self, store: TokenStore, client_factory: Callable[[], SrjbtClient]) -> None:
        self._store = store
        self._client_factory = client_factory
        self.state = OtpState.AWAITING_EMAIL
        self.user_id: str | None = None

    def request_code(self, email: str) -> str:
        if not email or not email.strip():
            raise ValueError("email is required")
        body = request_code(self._client_factory(), send_otp_payload(email))
        self.user_id = str(body["userId"])
        self.state = OtpState.AWAITING_CODE
        logger.info("OTP sent; awaiting code for user %s", self.user_id)
        return self.user_id

    def submit_code(self, code: str) -> OtpResult:
        if self.state is not OtpState.AWAITING_CODE or not self.user_id:
            raise RuntimeError(f"Cannot submit a code in state {self.state.value}")
        result = submit_code(self._client_factory(), validate_otp_payload(self.user_id, code))
        if result.success:
            if result.token:
                self._store.set(result.token)
            else:
                logger.warning("OTP login succeeded but no token came back; token store unchanged")
            self.user_id = None
            self.state = OtpState.AUTHENTICATED
            logger.info("OTP login succeeded")
        else:
            logger.info("OTP rejected: %s", result.status_message or "invalid code")
        return result

    def reset(self) -> None:
        self.user_id = None
        self.state = OtpState.AWAITING_EMAIL
