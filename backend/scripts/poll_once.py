#!/usr/bin/env python3
"""Run one poll tick without the web server (same as GET /poll) and print the result.
Run from backend (after pip install -e ".."): python scripts/poll_once.py [--test-mode]
Cold start: the first tick in a fresh process never notifies; use --test-mode to check the webhook.
"""
import json
import sys
from pathlib import Path

# backend dir (parent of scripts/)
backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from templewatch.core.errors import TempleWatchError
from templewatch.orchestrator.orchestrator import PollOrchestrator
from templewatch.services.auth import TokenStore


def main():
    orchestrator = PollOrchestrator(tokens=TokenStore())
    try:
        result = orchestrator.run_poll_tick(test_mode="--test-mode" in sys.argv[1:])
    except TempleWatchError as e:
        print(f"FAIL ({e.status_code}):", e)
        return 1
    print(json.dumps(result.to_response(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
