from __future__ import annotations


class HomePulseError(RuntimeError):
    """Base class for HomePulse runtime errors."""


class StoreWriteError(HomePulseError):
    """Raised when the sensor document cannot be written to disk."""

    def __init__(self, *, path: str, message: str):
        super().__init__(f"Failed to write {path}: {message}")
        self.path = path
        self.message = message
