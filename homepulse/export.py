"""Flatten sensor histories into a table for analysis/export."""

from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from .document import BOOLEAN_SENSORS, LIGHT_IDS, NUMERIC_SENSORS

COLUMNS = ["sensor", "kind", "timestamp", "state", "value", "duration_ms"]


def _row(sensor: str, kind: str, **fields: Any) -> Dict[str, Any]:
    row: Dict[str, Any] = {c: None for c in COLUMNS}
    row.update(sensor=sensor, kind=kind, **fields)
    return row


def _light_rows(light_id: str, history: List[Any]) -> List[Dict[str, Any]]:
    sensor = f"light_{light_id}"
    rows: List[Dict[str, Any]] = []
    for i, entry in enumerate(history):
        if isinstance(entry, dict):
            rows.append(_row(sensor, "toggle", timestamp=entry.get("timestamp"), state=entry.get("state")))
            continue
        # A duration is written right before the "off" toggle of the same instant.
        nxt = history[i + 1] if i + 1 < len(history) else None
        ts = nxt.get("timestamp") if isinstance(nxt, dict) else None
        rows.append(_row(sensor, "duration", timestamp=ts, duration_ms=entry))
    return rows


def history_frame(document: Dict[str, Any]) -> pd.DataFrame:
    """One row per history entry, ordered by time.

    Columns: sensor, kind (toggle|duration|reading), timestamp (epoch ms),
    time (UTC datetime), state, value, duration_ms.
    """

    rows: List[Dict[str, Any]] = []
    for lid in LIGHT_IDS:
        rows.extend(_light_rows(lid, document["lights"][lid]["history"]))

    for name in BOOLEAN_SENSORS:
        for entry in document[name]["history"]:
            rows.append(_row(name, "toggle", timestamp=entry.get("timestamp"), state=entry.get("state")))

    for name in NUMERIC_SENSORS:
        for entry in document[name]["history"]:
            rows.append(_row(name, "reading", timestamp=entry.get("timestamp"), value=entry.get("value")))

    df = pd.DataFrame(rows, columns=COLUMNS)
    df["timestamp"] = pd.to_numeric(df["timestamp"], errors="coerce")
    df.insert(3, "time", pd.to_datetime(df["timestamp"], unit="ms", utc=True))
    return df.sort_values("timestamp", kind="stable", na_position="last").reset_index(drop=True)
