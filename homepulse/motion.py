"""Dynamic motion sensor cycle.

The sensor is driven by its own nested delays instead of the main tick:

  IDLE --(U[idle_min, idle_max))--> ACTIVE --(U[active_min, active_max))--> IDLE

A cycle is represented by two timer handle slots. `arm()` only starts a new
cycle when both slots are empty, so at most one cycle is ever in flight.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional, Protocol, Tuple

from .document import MOTION_DYNAMIC
from .engine import Entropy

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def thread_timer(delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
    t = threading.Timer(delay_seconds, callback)
    t.daemon = True
    return t


class DynamicMotionScheduler:
    def __init__(
        self,
        apply_state: Callable[[bool], Any],
        *,
        entropy: Entropy,
        timer_factory: TimerFactory = thread_timer,
        idle_range: Tuple[float, float] = (180.0, 300.0),
        active_range: Tuple[float, float] = (1.0, 5.0),
    ):
        self.apply_state = apply_state
        self.entropy = entropy
        self.timer_factory = timer_factory
        self.idle_range = idle_range
        self.active_range = active_range

        self._lock = threading.Lock()
        self.on_timer: Optional[TimerHandle] = None
        self.off_timer: Optional[TimerHandle] = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self.on_timer is not None or self.off_timer is not None

    def arm(self) -> bool:
        """Start a new IDLE -> ACTIVE -> IDLE cycle unless one is in flight."""

        with self._lock:
            if self.on_timer is not None or self.off_timer is not None:
                return False
            delay = self.entropy.uniform(*self.idle_range)
            timer = self.timer_factory(delay, self._activate)
            self.on_timer = timer

        logger.debug("Dynamic motion armed (fires in %.1fs)", delay, extra={"sensor": MOTION_DYNAMIC})
        timer.start()
        return True

    def shutdown(self) -> None:
        """Cancel any pending cycle (application shutdown)."""

        with self._lock:
            timers = [t for t in (self.on_timer, self.off_timer) if t is not None]
            self.on_timer = None
            self.off_timer = None
        for t in timers:
            t.cancel()

    def _activate(self) -> None:
        try:
            self.apply_state(True)
        except Exception:
            logger.exception("Dynamic motion activation failed; cycle dropped", extra={"sensor": MOTION_DYNAMIC})
            self._clear()
            return

        with self._lock:
            if self.on_timer is None:
                # shutdown() ran while we were persisting
                return
            delay = self.entropy.uniform(*self.active_range)
            timer = self.timer_factory(delay, self._deactivate)
            self.off_timer = timer
        timer.start()

    def _deactivate(self) -> None:
        try:
            self.apply_state(False)
        except Exception:
            logger.exception("Dynamic motion deactivation failed", extra={"sensor": MOTION_DYNAMIC})
        finally:
            self._clear()

    def _clear(self) -> None:
        with self._lock:
            self.on_timer = None
            self.off_timer = None
