"""HomePulse smart-home sensor simulator.

Local-first simulation of a small sensor network:
- six lights with on-time tracking
- static/dynamic motion and gas sensors
- bounded random-walk temperature and humidity
- change-triggered history persisted as one JSON document

This package is intentionally small and "boring" for readability.
"""

__version__ = "0.1.0"
