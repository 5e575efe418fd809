#!/usr/bin/env python3
"""Force a simulation tick on a running server and print the current readings.

Handy instead of waiting for the 3 minute interval.

Usage:
  python scripts/generate_now.py --api-url http://localhost:3000 --count 3
"""

from __future__ import annotations

import argparse
import json
import os
import sys

import requests


def main() -> int:
    ap = argparse.ArgumentParser(description="POST /generate then GET /current.")
    ap.add_argument("--api-url", default=os.getenv("HOMEPULSE_API_URL", "http://localhost:3000"))
    ap.add_argument("--count", type=int, default=1, help="Number of ticks to trigger.")
    ap.add_argument("--timeout", type=float, default=10.0)
    args = ap.parse_args()

    base = args.api_url.rstrip("/")

    for i in range(max(1, args.count)):
        r = requests.post(f"{base}/generate", timeout=args.timeout)
        if r.status_code != 200:
            print(f"[generate] tick {i + 1} failed: {r.status_code} {r.text[:200]}", file=sys.stderr)
            return 1

    r = requests.get(f"{base}/current", timeout=args.timeout)
    r.raise_for_status()
    print(json.dumps(r.json(), indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
