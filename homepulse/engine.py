from __future__ import annotations

import logging
import random
import threading
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from .document import (
    GAS,
    HUMIDITY,
    HUMIDITY_BOUNDS,
    HUMIDITY_MAX_STEP,
    LIGHT_IDS,
    MOTION_DYNAMIC,
    MOTION_STATIC,
    TEMPERATURE,
    TEMPERATURE_BOUNDS,
    TEMPERATURE_MAX_STEP,
    now_ms,
    record_toggle,
    step_value,
)
from .store import JsonStore

logger = logging.getLogger(__name__)


class Entropy(Protocol):
    """Anything that can draw a uniform float; `random.Random` qualifies."""

    def uniform(self, a: float, b: float) -> float: ...


class MotionArmer(Protocol):
    def arm(self) -> bool: ...


class SimulationEngine:
    """Owns every mutation of the sensor document.

    Each tick is load -> mutate -> save under one lock: sync FastAPI routes run
    in a thread pool and motion timers fire on their own threads, so two
    mutations must never interleave.
    """

    def __init__(
        self,
        store: JsonStore,
        *,
        entropy: Optional[Entropy] = None,
        clock: Callable[[], int] = now_ms,
        motion: Optional[MotionArmer] = None,
    ):
        self.store = store
        self.entropy: Entropy = entropy if entropy is not None else random.Random()
        self.clock = clock
        self.motion = motion
        self.lock = threading.RLock()

    def tick(self, *, source: str = "manual") -> Dict[str, Any]:
        """Advance every sensor once, persist, and return the new document."""

        with self.lock:
            doc = self.store.load()
            now = self.clock()

            changes = self._update_lights(doc, now)
            changes += self._force_static_off(doc, now)
            changes += self._walk(doc[TEMPERATURE], TEMPERATURE_MAX_STEP, TEMPERATURE_BOUNDS, now)
            changes += self._walk(doc[HUMIDITY], HUMIDITY_MAX_STEP, HUMIDITY_BOUNDS, now)

            self.store.save(doc)

            # Arms only when no cycle is in flight; never interrupts one.
            if self.motion is not None:
                self.motion.arm()

        logger.info("Tick complete: %d change(s)", changes, extra={"tick_source": source, "changes": changes})
        return doc

    def set_dynamic_motion(self, state: bool) -> Dict[str, Any]:
        """Persist a dynamic motion sensor transition (called from scheduler timers)."""

        with self.lock:
            doc = self.store.load()
            sensor = doc[MOTION_DYNAMIC]
            sensor["state"] = state
            record_toggle(sensor, state, self.clock())
            self.store.save(doc)

        logger.debug("Dynamic motion -> %s", state, extra={"sensor": MOTION_DYNAMIC})
        return doc

    def _update_lights(self, doc: Dict[str, Any], now: int) -> int:
        flipped = 0
        for lid in LIGHT_IDS:
            light = doc["lights"][lid]
            new_state = self.entropy.uniform(0.0, 1.0) > 0.5
            if light["state"] == new_state:
                continue

            if new_state:
                light["timerStart"] = now
            elif light.get("timerStart") is not None:
                # Wall clock; a backward jump must not log a negative on-time.
                light["history"].append(max(0, now - light["timerStart"]))
                light["timerStart"] = None

            light["state"] = new_state
            record_toggle(light, new_state, now)
            flipped += 1
            logger.debug("Light %s -> %s", lid, new_state, extra={"sensor": f"light_{lid}"})
        return flipped

    @staticmethod
    def _force_static_off(doc: Dict[str, Any], now: int) -> int:
        # Nothing sets these sensors true; the branch only repairs stale files.
        changed = 0
        for name in (MOTION_STATIC, GAS):
            sensor = doc[name]
            if sensor["state"] is not False:
                sensor["state"] = False
                record_toggle(sensor, False, now)
                changed += 1
                logger.warning("%s was not off; forced to false", name, extra={"sensor": name})
        return changed

    def _walk(self, sensor: Dict[str, Any], max_step: float, bounds: Tuple[float, float], now: int) -> int:
        value = step_value(sensor["current"], self.entropy.uniform(-max_step, max_step), bounds)
        if value == sensor["current"]:
            return 0
        sensor["current"] = value
        sensor["history"].append({"timestamp": now, "value": value})
        return 1
