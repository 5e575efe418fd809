from __future__ import annotations

import pandas as pd

from homepulse.document import default_document
from homepulse.export import COLUMNS, history_frame


def test_history_frame_orders_entries_by_time() -> None:
    doc = default_document()
    doc["lights"]["2"]["history"] = [
        {"timestamp": 1_000, "state": True},
        500,
        {"timestamp": 1_500, "state": False},
    ]
    doc["motionSensorDynamic"]["history"] = [{"timestamp": 1_100, "state": True}]
    doc["temperature"]["history"] = [{"timestamp": 1_200, "value": 22.1}]

    df = history_frame(doc)

    assert list(df["sensor"]) == ["light_2", "motionSensorDynamic", "temperature", "light_2", "light_2"]
    assert list(df["kind"]) == ["toggle", "toggle", "reading", "duration", "toggle"]
    assert list(df["timestamp"]) == [1_000, 1_100, 1_200, 1_500, 1_500]

    duration = df[df["kind"] == "duration"].iloc[0]
    assert duration["duration_ms"] == 500

    reading = df[df["kind"] == "reading"].iloc[0]
    assert reading["value"] == 22.1
    assert reading["time"] == pd.Timestamp(1_200, unit="ms", tz="UTC")


def test_history_frame_empty_document() -> None:
    df = history_frame(default_document())

    assert df.empty
    assert set(COLUMNS) <= set(df.columns)
    assert "time" in df.columns
