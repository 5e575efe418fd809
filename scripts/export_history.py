#!/usr/bin/env python3
"""Export every sensor history entry to one CSV file.

Reads the sensor document directly from disk (no running server needed).

Usage:
  python scripts/export_history.py --data-file data/data.json --out data/history.csv
  python scripts/export_history.py --sensor temperature --sensor humidity
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from homepulse.config import settings
from homepulse.export import history_frame
from homepulse.store import JsonStore


def main() -> int:
    ap = argparse.ArgumentParser(description="Export HomePulse sensor history as CSV.")
    ap.add_argument("--data-file", type=str, default=settings.data_file)
    ap.add_argument("--out", type=str, default="data/history.csv")
    ap.add_argument(
        "--sensor",
        action="append",
        default=[],
        help="Only export these sensors (repeatable), e.g. light_3 or temperature.",
    )
    args = ap.parse_args()

    df = history_frame(JsonStore(args.data_file).load())
    if args.sensor:
        df = df[df["sensor"].isin(args.sensor)]

    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out, index=False)

    summary = {str(k): int(v) for k, v in df.groupby("sensor").size().items()}
    print(json.dumps({"ok": True, "out": str(out), "rows": int(len(df)), "per_sensor": summary}, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
