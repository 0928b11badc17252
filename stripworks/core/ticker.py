"""
Per-frame tick loop shared by playback, editor previews and the runtime preview.
NO UI DEPENDENCIES.

The host display loop calls FrameLoop.tick(dt) once per displayed frame.
Each surface has at most one registered Tickable; registering a new one on the
same surface stops and drops the previous registration first.
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class Tickable(ABC):
    """Something advanced by the host's per-frame callback."""

    _running: bool = False

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._running = True

    def stop(self) -> None:
        """Stop receiving ticks. Safe to call more than once."""
        self._running = False

    @abstractmethod
    def tick(self, dt: float) -> None:
        """Advance by dt seconds."""


class FrameLoop:
    """
    Owns the per-frame registrations of every open session.

    Usage:
        loop = FrameLoop()
        loop.register("preview", scheduler)
        while window_open:
            loop.tick(clock.tick(60) / 1000.0)
        loop.cancel("preview")
    """

    def __init__(self) -> None:
        self._registrations: Dict[str, Tickable] = {}
        self._ticks: int = 0

    @property
    def tick_number(self) -> int:
        return self._ticks

    @property
    def active_count(self) -> int:
        return len(self._registrations)

    def get(self, surface: str) -> Optional[Tickable]:
        return self._registrations.get(surface)

    def register(self, surface: str, tickable: Tickable) -> None:
        """Start ticking `tickable` for `surface`, cancelling any prior registration."""
        if surface in self._registrations:
            self.cancel(surface)

        tickable.start()
        self._registrations[surface] = tickable
        logger.info(f"Registered {type(tickable).__name__} on '{surface}'")

    def cancel(self, surface: str) -> bool:
        """Stop and drop the registration for `surface`. Returns False if none."""
        tickable = self._registrations.pop(surface, None)
        if tickable is None:
            return False

        tickable.stop()
        logger.info(f"Cancelled {type(tickable).__name__} on '{surface}'")
        return True

    def cancel_all(self) -> None:
        for surface in list(self._registrations):
            self.cancel(surface)

    def tick(self, dt: float) -> None:
        """Advance every running registration by dt seconds."""
        self._ticks += 1
        # Copy: a tick may close its own session and cancel itself
        for tickable in list(self._registrations.values()):
            if tickable.is_running:
                tickable.tick(dt)
