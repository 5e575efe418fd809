from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .config import Settings, build_entropy, settings
from .engine import Entropy, SimulationEngine
from .motion import DynamicMotionScheduler, TimerFactory, thread_timer
from .store import JsonStore
from .ticker import Ticker

logger = logging.getLogger(__name__)


@dataclass
class Simulation:
    """Wired-up store, engine, motion scheduler and ticker for one process."""

    store: JsonStore
    engine: SimulationEngine
    motion: DynamicMotionScheduler
    ticker: Ticker

    def start(self, *, tick_now: bool = True, run_ticker: bool = True) -> None:
        if tick_now:
            self.ticker.run_once()
        if run_ticker:
            self.ticker.start()

    def stop(self) -> None:
        self.ticker.stop()
        self.motion.shutdown()


def build_simulation(
    cfg: Settings = settings,
    *,
    entropy: Optional[Entropy] = None,
    timer_factory: TimerFactory = thread_timer,
) -> Simulation:
    rng = entropy if entropy is not None else build_entropy(cfg.sim_seed)

    store = JsonStore(cfg.data_file)
    engine = SimulationEngine(store, entropy=rng)
    motion = DynamicMotionScheduler(
        engine.set_dynamic_motion,
        entropy=rng,
        timer_factory=timer_factory,
        idle_range=(cfg.motion_idle_min_seconds, cfg.motion_idle_max_seconds),
        active_range=(cfg.motion_active_min_seconds, cfg.motion_active_max_seconds),
    )
    engine.motion = motion

    ticker = Ticker(lambda: engine.tick(source="interval"), interval_seconds=cfg.tick_interval_seconds)

    logger.debug("Simulation wired", extra={"data_file": cfg.data_file})
    return Simulation(store=store, engine=engine, motion=motion, ticker=ticker)
