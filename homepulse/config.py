from __future__ import annotations

import os
import random
from dataclasses import dataclass
from typing import Optional


def _truthy(value: str) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "y", "on")


@dataclass(frozen=True)
class Settings:
    # -----------------
    # App
    # -----------------
    app_env: str = os.getenv("APP_ENV", "local")

    # -----------------
    # HTTP
    # -----------------
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # -----------------
    # Storage
    # -----------------
    # The whole sensor document lives in one JSON file, rewritten on every save.
    data_file: str = os.getenv("DATA_FILE", os.path.join("data", "data.json"))

    # -----------------
    # Simulation cadence
    # -----------------
    tick_interval_seconds: float = float(os.getenv("TICK_INTERVAL_SECONDS", "180"))

    # Dynamic motion sensor cycle: idle for U[min, max) then active for U[min, max).
    motion_idle_min_seconds: float = float(os.getenv("MOTION_IDLE_MIN_SECONDS", "180"))
    motion_idle_max_seconds: float = float(os.getenv("MOTION_IDLE_MAX_SECONDS", "300"))
    motion_active_min_seconds: float = float(os.getenv("MOTION_ACTIVE_MIN_SECONDS", "1"))
    motion_active_max_seconds: float = float(os.getenv("MOTION_ACTIVE_MAX_SECONDS", "5"))

    # Background ticker. Disable for tests or when an external scheduler hits /generate.
    enable_ticker: bool = _truthy(os.getenv("ENABLE_TICKER", "true"))
    tick_on_startup: bool = _truthy(os.getenv("TICK_ON_STARTUP", "true"))

    # If you want reproducible readings for demos, set SIM_SEED.
    sim_seed: str = os.getenv("SIM_SEED", "")

    # -----------------
    # Logging
    # -----------------
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_format: str = os.getenv("LOG_FORMAT", "json").lower()  # json|console


settings = Settings()


def build_entropy(seed: Optional[str]) -> random.Random:
    """Return the random source used by the simulation.

    Digit-only seeds give a deterministic sequence; anything else is unseeded.
    """

    s = (seed or "").strip()
    return random.Random(int(s)) if s.isdigit() else random.Random()
