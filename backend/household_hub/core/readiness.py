"""
Process readiness state for the health probe.
"""

import threading


class ReadinessState:
    """Starts not ready; the application lifespan flips it."""

    def __init__(self, ready: bool = False):
        self._lock = threading.Lock()
        self._ready = ready

    @property
    def ready(self) -> bool:
        with self._lock:
            return self._ready

    def mark_ready(self) -> None:
        with self._lock:
            self._ready = True

    def mark_not_ready(self) -> None:
        with self._lock:
            self._ready = False
