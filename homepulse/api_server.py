from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from . import __version__
from .config import settings
from .document import current_view, history_view
from .exceptions import StoreWriteError
from .logging_setup import setup_logging
from .middleware import request_context_middleware
from .runtime import Simulation, build_simulation

BANNER = (
    "HomePulse sensor simulator is running. "
    "Routes: GET /current (current readings), GET /history (history), POST /generate (run a tick now)"
)

setup_logging(log_level=settings.log_level, log_format=settings.log_format)

logger = logging.getLogger(__name__)

_simulation: Optional[Simulation] = None


def get_simulation() -> Simulation:
    global _simulation
    if _simulation is None:
        _simulation = build_simulation(settings)
    return _simulation


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    sim = get_simulation()
    logger.info("Using sensor document %s", settings.data_file, extra={"data_file": settings.data_file})
    # One tick at boot, then one every interval. The tick does blocking file I/O.
    await run_in_threadpool(sim.start, tick_now=settings.tick_on_startup, run_ticker=settings.enable_ticker)
    try:
        yield
    finally:
        sim.stop()


app = FastAPI(title="HomePulse Sensor Simulator", version=__version__, lifespan=lifespan)
app.middleware("http")(request_context_middleware)


# -----------------------------
# Health
# -----------------------------


@app.get("/healthz")
def healthz() -> Dict[str, Any]:
    return {"ok": True, "version": __version__}


# -----------------------------
# Sensors
# -----------------------------


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    return BANNER


@app.get("/current")
def current(sim: Simulation = Depends(get_simulation)) -> Dict[str, Any]:
    """Current reading of every sensor, no history."""

    return current_view(sim.store.load())


@app.get("/history")
def history(sim: Simulation = Depends(get_simulation)) -> Dict[str, Any]:
    """History arrays of every sensor, no current values."""

    return history_view(sim.store.load())


@app.post("/generate")
def generate(sim: Simulation = Depends(get_simulation)) -> Dict[str, Any]:
    """Run one simulation tick now and return the full document."""

    try:
        return sim.engine.tick(source="api")
    except StoreWriteError as e:
        logger.exception("Manual tick failed")
        raise HTTPException(status_code=500, detail=str(e)) from e
