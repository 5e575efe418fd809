"""Sensor document shape and the small helpers that mutate it.

The whole simulated house is one JSON object:

  lights["1".."6"]     {state, timerStart, history: [toggle | duration_ms]}
  motionSensorStatic   {state, history: [toggle]}
  gasSensor            {state, history: [toggle]}
  motionSensorDynamic  {state, history: [toggle]}
  temperature          {current, history: [{timestamp, value}]}
  humidity             {current, history: [{timestamp, value}]}

Timestamps are Unix epoch milliseconds. A toggle entry is
`{"timestamp": ms, "state": bool}`.
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Tuple

LIGHT_IDS: Tuple[str, ...] = tuple(str(i) for i in range(1, 7))

MOTION_STATIC = "motionSensorStatic"
GAS = "gasSensor"
MOTION_DYNAMIC = "motionSensorDynamic"
BOOLEAN_SENSORS: Tuple[str, ...] = (MOTION_STATIC, GAS, MOTION_DYNAMIC)

TEMPERATURE = "temperature"
HUMIDITY = "humidity"
NUMERIC_SENSORS: Tuple[str, ...] = (TEMPERATURE, HUMIDITY)

TEMPERATURE_DEFAULT = 22.0
TEMPERATURE_BOUNDS: Tuple[float, float] = (18.0, 26.0)
TEMPERATURE_MAX_STEP = 0.1

HUMIDITY_DEFAULT = 50.0
HUMIDITY_BOUNDS: Tuple[float, float] = (30.0, 80.0)
HUMIDITY_MAX_STEP = 3.0


def now_ms() -> int:
    return int(time.time() * 1000)


def default_document() -> Dict[str, Any]:
    return {
        "lights": {lid: {"state": False, "timerStart": None, "history": []} for lid in LIGHT_IDS},
        MOTION_STATIC: {"state": False, "history": []},
        GAS: {"state": False, "history": []},
        MOTION_DYNAMIC: {"state": False, "history": []},
        TEMPERATURE: {"current": TEMPERATURE_DEFAULT, "history": []},
        HUMIDITY: {"current": HUMIDITY_DEFAULT, "history": []},
    }


def missing_keys(document: Dict[str, Any]) -> List[str]:
    """Dotted paths the engine and views need but `document` lacks.

    Presence only: types and values are not checked.
    """

    missing: List[str] = []
    lights = document.get("lights")
    if not isinstance(lights, dict):
        missing.append("lights")
    else:
        for lid in LIGHT_IDS:
            light = lights.get(lid)
            if not isinstance(light, dict):
                missing.append(f"lights.{lid}")
                continue
            missing.extend(f"lights.{lid}.{k}" for k in ("state", "timerStart", "history") if k not in light)

    for name in BOOLEAN_SENSORS:
        sensor = document.get(name)
        if not isinstance(sensor, dict):
            missing.append(name)
            continue
        missing.extend(f"{name}.{k}" for k in ("state", "history") if k not in sensor)

    for name in NUMERIC_SENSORS:
        sensor = document.get(name)
        if not isinstance(sensor, dict):
            missing.append(name)
            continue
        missing.extend(f"{name}.{k}" for k in ("current", "history") if k not in sensor)

    return missing


def record_toggle(sensor: Dict[str, Any], state: bool, timestamp: int) -> bool:
    """Append `{timestamp, state}` unless the last entry already carries that state.

    Light histories interleave plain duration numbers; a trailing duration has
    no state, so the toggle is always appended after one.
    """

    history: List[Any] = sensor["history"]
    if history:
        last = history[-1]
        if isinstance(last, dict) and last.get("state") is state:
            return False
    history.append({"timestamp": timestamp, "state": state})
    return True


def step_value(current: float, delta: float, bounds: Tuple[float, float]) -> float:
    """Apply a random-walk delta, round to 0.1 and clamp into bounds."""

    low, high = bounds
    value = round(current + delta, 1)
    if value < low:
        value = low
    if value > high:
        value = high
    return float(value)


def current_view(document: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten the document to current readings only (no history)."""

    return {
        "lights": {lid: document["lights"][lid]["state"] for lid in LIGHT_IDS},
        MOTION_STATIC: document[MOTION_STATIC]["state"],
        GAS: document[GAS]["state"],
        MOTION_DYNAMIC: document[MOTION_DYNAMIC]["state"],
        TEMPERATURE: document[TEMPERATURE]["current"],
        HUMIDITY: document[HUMIDITY]["current"],
    }


def history_view(document: Dict[str, Any]) -> Dict[str, Any]:
    """Only the history arrays, keyed like `current_view`."""

    return {
        "lights": {lid: document["lights"][lid]["history"] for lid in LIGHT_IDS},
        MOTION_STATIC: document[MOTION_STATIC]["history"],
        GAS: document[GAS]["history"],
        MOTION_DYNAMIC: document[MOTION_DYNAMIC]["history"],
        TEMPERATURE: document[TEMPERATURE]["history"],
        HUMIDITY: document[HUMIDITY]["history"],
    }
