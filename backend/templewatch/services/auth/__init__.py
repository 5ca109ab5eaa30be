"""Auth token resolution and the OTP login flow that refreshes it."""
from templewatch.services.auth.otp import OtpResult, OtpSession, OtpState, request_code, submit_code
from templewatch.services.auth.token_store import TokenStore

__all__ = ["OtpResult", "OtpSession", "OtpState", "TokenStore", "request_code", "submit_code"]
