#!/usr/bin/env python3
"""
Quick checks so the backend can start. Run from repo root or backend/:
  python scripts/check_backend.py
  # or from repo root:
  cd backend && python scripts/check_backend.py
"""
import os
import sys
from pathlib import Path

# Run from backend/
backend_dir = Path(__file__).resolve().parent.parent
os.chdir(backend_dir)
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))


def main():
    errors = []
    warnings = []

    # 1) .env
    env_file = backend_dir / ".env"
    if not env_file.exists():
        warnings.append("backend/.env missing. Settings come from the process environment only.")
    else:
        print("OK  .env exists")

    # 2) Settings (token + webhook are optional but nothing useful happens without them)
    try:
        from templewatch.config import settings
        print("OK  Settings load (date_policy=%s)" % settings.date_policy)
        if not settings.api_token:
            warnings.append("API_TOKEN not set: polls need x-auth-token, the auth_token cookie, or an OTP login.")
        if not settings.slack_webhook_url:
            warnings.append("SLACK_WEBHOOK_URL not set: changes are detected but not delivered.")
    except Exception as e:
        errors.append(f"Settings: {e}")
        print("FAIL Settings:", e)

    # 3) App import (catches missing deps, bad imports)
    try:
        from templewatch.main import app  # noqa: F401
        print("OK  App import (templewatch.main)")
    except Exception as e:
        errors.append(f"App import: {e}")
        print("FAIL App import:", e)
        print("\nFix the above, then run:")
        print("  cd backend && uvicorn templewatch.main:app --reload --host 0.0.0.0 --port 8000")
        return 1

    # 4) Port 8000
    try:
        import socket
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind(("127.0.0.1", 8000))
        print("OK  Port 8000 is free")
    except OSError:
        errors.append("Port 8000 is in use. Stop the other process or use another port (e.g. --port 8001).")
        print("FAIL Port 8000 is in use")

    for w in warnings:
        print("WARN", w)
    if errors:
        print("\n---")
        for e in errors:
            print("•", e)
        return 1

    print("\nAll checks passed. Start with: cd backend && uvicorn templewatch.main:app --port 8000")
    return 0


if __name__ == "__main__":
    sys.exit(main())
