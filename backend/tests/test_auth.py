"""Tests for token resolution and the OTP login session."""
import pytest

from templewatch.core.errors import Unauthorized, UpstreamUnavailable
from templewatch.services.auth import OtpSession, OtpState, TokenStore


def test_cookie_beats_fallback():
    assert TokenStore(fallback="Y").resolve(cookie="X") == "X"


def test_fallback_used_alone():
    assert TokenStore(fallback="Y").resolve() == "Y"


def test_nothing_resolvable_is_unauthorized():
    store = TokenStore(fallback="")
    with pytest.raises(Unauthorized):
        store.resolve()
    with pytest.raises(Unauthorized):
        store.resolve(explicit="  ", cookie="")
    assert store.has_token() is False


def test_full_precedence_order():
    store = TokenStore(fallback="F")
    store.set("S")
    assert store.resolve(explicit="E", cookie="C") == "E"
    assert store.resolve(cookie="C") == "C"
    assert store.resolve() == "S"
    store.clear()
    assert store.resolve() == "F"


def test_set_rejects_blank():
    with pytest.raises(ValueError):
        TokenStore(fallback="").set("   ")


class FakeOtpClient:
    def __init__(self, *, user_id="u-1", good_code="123456", token="fresh-token"):
        self.user_id = user_id
        self.good_code = good_code
        self.token = token
        self.sent: list[dict] = []
        self.validated: list[dict] = []

    def send_otp(self, payload):
        self.sent.append(payload)
        if not self.user_id:
            return {"statusMessage": "Email not registered"}
        return {"userId": self.user_id, "statusMessage": "OTP sent", "actionMsg": "Check email"}

    def validate_otp(self, payload):
        self.validated.append(payload)
        if payload["otp"] != self.good_code:
            return {"loginSuccess": False, "statusMessage": "Invalid OTP"}, None
        return {"loginSuccess": True, "statusMessage": "Welcome"}, self.token


def _session(client, store=None):
    store = store or TokenStore(fallback="")
    return OtpSession(store, lambda: client), store


def test_request_code_moves_to_awaiting_code():
    client = FakeOtpClient()
    session, _ = _session(client)
    assert session.request_code("devotee@example.com") == "u-1"
    assert session.state is OtpState.AWAITING_CODE
    assert client.sent == [{"emailId": "devotee@example.com", "otpType": "Resend", "emailFlag": 1, "aartiFlag": 1}]


def test_request_code_without_user_id_fails():
    session, _ = _session(FakeOtpClient(user_id=None))
    with pytest.raises(UpstreamUnavailable, match="Email not registered"):
        session.request_code("nobody@example.com")
    assert session.state is OtpState.AWAITING_EMAIL


def test_wrong_code_allows_retry_then_success_stores_token():
    client = FakeOtpClient()
    session, store = _session(client)
    session.request_code("devotee@example.com")

    bad = session.submit_code("000000")
    assert bad.success is False
    assert bad.status_message == "Invalid OTP"
    assert session.state is OtpState.AWAITING_CODE
    assert store.stored is None

    good = session.submit_code(" 123456 ")
    assert good.success is True
    assert good.token == "fresh-token"
    assert session.state is OtpState.AUTHENTICATED
    assert session.user_id is None
    assert store.resolve() == "fresh-token"
    assert client.validated[-1] == {"userId": "u-1", "otp": "123456", "otpType": "Resend"}


def test_submit_before_request_is_rejected():
    session, _ = _session(FakeOtpClient())
    with pytest.raises(RuntimeError):
        session.submit_code("123456")


def test_reset_returns_to_awaiting_email():
    session, _ = _session(FakeOtpClient())
    session.request_code("devotee@example.com")
    session.reset()
    assert session.state is OtpState.AWAITING_EMAIL
    assert session.user_id is None
