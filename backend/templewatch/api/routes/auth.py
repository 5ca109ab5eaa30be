"""
Auth: OTP login proxy to the booking API and manual token entry.

A token obtained here is stored for this process (so scheduled polls pick it up) and mirrored
onto the auth_token cookie so the dashboard sends it back on later requests.
"""
import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from templewatch.api.deps import CallerToken, caller_token, get_orchestrator
from templewatch.core.constants import OTP_TYPE_RESEND, TOKEN_COOKIE_MAX_AGE_DAYS, TOKEN_COOKIE_NAME
from templewatch.core.errors import Unauthorized, UpstreamUnavailable
from templewatch.orchestrator.orchestrator import PollOrchestrator
from templewatch.services.auth.otp import request_code, submit_code
from templewatch.services.srjbt.client import SrjbtClient

router = APIRouter()
logger = logging.getLogger(__name__)


class SendOtpBody(BaseModel):
    emailId: str = Field(..., min_length=3, max_length=256)
    otpType: str = OTP_TYPE_RESEND
    emailFlag: int = 1
    aartiFlag: int = 1


class ValidateOtpBody(BaseModel):
    userId: str | int
    otp: str = Field(..., min_length=1, max_length=16)
    otpType: str = OTP_TYPE_RESEND


class TokenBody(BaseModel):
    token: str = Field(..., min_length=1, max_length=4096)


def _otp_client(orchestrator: PollOrchestrator, token: CallerToken) -> SrjbtClient:
    """OTP calls go out with whatever token we have; none is fine."""
    try:
        active = orchestrator.tokens.resolve(token.explicit, token.cookie)
    except Unauthorized:
        active = ""
    return SrjbtClient(active)


def _upstream_error(e: Exception, default: str) -> JSONResponse:
    if isinstance(e, UpstreamUnavailable):
        return JSONResponse({"error": e.message or default}, status_code=e.upstream_status or 500)
    return JSONResponse({"error": str(e) or default}, status_code=getattr(e, "status_code", 500))


def _set_token_cookie(response: JSONResponse, token: str) -> None:
    response.set_cookie(
        TOKEN_COOKIE_NAME,
        token,
        max_age=TOKEN_COOKIE_MAX_AGE_DAYS * 24 * 60 * 60,
        path="/",
        samesite="strict",
    )


@router.post("/send-otp")
def send_otp(
    body: SendOtpBody,
    orchestrator: PollOrchestrator = Depends(get_orchestrator),
    token: CallerToken = Depends(caller_token),
):
    """Ask the booking API to mail a one-time code. Returns its {userId, statusMessage, actionMsg}."""
    try:
        data = request_code(_otp_client(orchestrator, token), body.model_dump())
    except Exception as e:
        logger.warning("send-otp failed: %s", e)
        return _upstream_error(e, "Failed to send OTP")
    return data


@router.post("/validate-otp")
def validate_otp(
    body: ValidateOtpBody,
    orchestrator: PollOrchestrator = Depends(get_orchestrator),
    token: CallerToken = Depends(caller_token),
):
    """
    Submit the code. On success the new token is stored, returned as authToken and set as the
    auth_token cookie; authTokenPresent says whether one came back.
    """
    payload: dict[str, Any] = {"userId": body.userId, "otp": body.otp.strip(), "otpType": body.otpType}
    try:
        result = submit_code(_otp_client(orchestrator, token), payload)
    except Exception as e:
        logger.warning("validate-otp failed: %s", e)
        return _upstream_error(e, "Failed to validate OTP")
    data = dict(result.body or {})
    data["authTokenPresent"] = result.token is not None
    if result.token:
        data["authToken"] = result.token
    response = JSONResponse(data)
    if result.success and result.token:
        orchestrator.tokens.set(result.token)
        _set_token_cookie(response, result.token)
    return response


@router.post("/token")
def set_token(body: TokenBody, orchestrator: PollOrchestrator = Depends(get_orchestrator)):
    """Manually entered token (copied from the booking site)."""
    token = body.token.strip()
    if not token:
        return JSONResponse({"error": "Token must not be blank"}, status_code=422)
    orchestrator.tokens.set(token)
    response = JSONResponse({"ok": True})
    _set_token_cookie(response, token)
    return response


@router.delete("/token")
def clear_token(orchestrator: PollOrchestrator = Depends(get_orchestrator)):
    """Forget the stored token and expire the cookie. The API_TOKEN fallback still applies."""
    orchestrator.tokens.clear()
    response = JSONResponse({"ok": True})
    response.delete_cookie(TOKEN_COOKIE_NAME, path="/", samesite="strict")
    return response


@router.get("/status")
def token_status(
    orchestrator: PollOrchestrator = Depends(get_orchestrator),
    token: CallerToken = Depends(caller_token),
):
    """Whether a token would resolve for this caller (does not call the booking API)."""
    return {"tokenAvailable": orchestrator.tokens.has_token(token.explicit, token.cookie)}
