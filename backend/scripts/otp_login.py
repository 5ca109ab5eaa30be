#!/usr/bin/env python3
"""Log in to the booking API with an emailed one-time code and print the token for API_TOKEN.
Run from backend (after pip install -e ".."): python scripts/otp_login.py you@example.com
"""
import sys
from pathlib import Path

# backend dir (parent of scripts/)
backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from templewatch.core.errors import TempleWatchError
from templewatch.services.auth import OtpSession, OtpState, TokenStore
from templewatch.services.srjbt import SrjbtClient


def main():
    if len(sys.argv) < 2:
        print("Usage: otp_login.py EMAIL")
        return 2
    store = TokenStore(fallback="")
    session = OtpSession(store, lambda: SrjbtClient(store.stored or ""))
    try:
        user_id = session.request_code(sys.argv[1])
    except TempleWatchError as e:
        print("FAIL send OTP:", e)
        return 1
    print(f"OTP sent (userId={user_id}). Check your email.")

    while session.state is OtpState.AWAITING_CODE:
        code = input("Code (blank to quit): ").strip()
        if not code:
            return 1
        try:
            result = session.submit_code(code)
        except TempleWatchError as e:
            print("FAIL validate OTP:", e)
            return 1
        if not result.success:
            print("Rejected:", result.status_message or "invalid code")

    if not store.stored:
        print("Logged in, but the API returned no token.")
        return 1
    print("\nAdd this to backend/.env:")
    print(f"API_TOKEN={store.stored}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
