"""Deferred dashboard recomputation.

A preference toggle or a new book snapshot schedules a recomputation a short
moment later. While one is pending the dashboard shows a placeholder; a newer
submission replaces the pending one, and a computation that has been
superseded never publishes its result.
"""

import logging
import threading
from enum import Enum
from typing import Any, Callable, Optional

from ..config import DEFAULT_RECOMPUTE_DELAY
from ..dates import Now
from ..library.loader import coerce_books
from ..settings.schemas import PreferenceSet
from .engine import DashboardResult, compute_dashboard

logger = logging.getLogger(__name__)

Listener = Callable[[DashboardResult], None]


class DashboardState(str, Enum):
    """What the dashboard should display."""

    IDLE = "idle"  # Nothing submitted yet
    CALCULATING = "calculating"  # Placeholder while a computation is pending
    READY = "ready"


class DashboardScheduler:
    """Debounces dashboard recomputation, last submission wins."""

    def __init__(
        self,
        listener: Optional[Listener] = None,
        delay: float = DEFAULT_RECOMPUTE_DELAY,
        **compute_options: Any,
    ):
        """Initialize the scheduler.

        Args:
            listener: Called with each published result
            delay: Seconds to wait before computing
            compute_options: Extra keyword arguments for compute_dashboard
                             (tz, weekly_goal_seconds)
        """
        self.listener = listener
        self.delay = max(0.0, delay)
        self.compute_options = compute_options

        self._lock = threading.Lock()
        self._generation = 0
        self._pending: Optional[tuple[int, list, PreferenceSet, Now]] = None
        self._timer: Optional[threading.Timer] = None
        self._state = DashboardState.IDLE
        self._result: Optional[DashboardResult] = None

    @property
    def state(self) -> DashboardState:
        with self._lock:
            return self._state

    @property
    def result(self) -> Optional[DashboardResult]:
        """Latest published result, None while a newer one is pending."""
        with self._lock:
            if self._state != DashboardState.READY:
                return None
            return self._result

    def submit(
        self,
        books: Any,
        preferences: Optional[PreferenceSet] = None,
        now: Now = None,
    ) -> int:
        """Schedule a recomputation for a new snapshot.

        Returns:
            Generation number of this submission
        """
        records = coerce_books(books)
        preferences = preferences or PreferenceSet()

        with self._lock:
            self._generation += 1
            generation = self._generation
            if self._timer is not None:
                self._timer.cancel()
                logger.debug(f"Superseded pending dashboard computation with {generation}")
            self._pending = (generation, records, preferences, now)
            self._state = DashboardState.CALCULATING

            timer = threading.Timer(self.delay, self._run, args=(generation,))
            timer.daemon = True
            self._timer = timer

        timer.start()
        return generation

    def flush(self) -> Optional[DashboardResult]:
        """Run the pending computation now instead of waiting.

        Returns:
            The published result, or None when nothing was pending
        """
        with self._lock:
            pending = self._take_pending(None)
        if pending is None:
            return None
        return self._execute(pending)

    def cancel(self) -> None:
        """Drop the pending computation, keeping the last result."""
        with self._lock:
            self._take_pending(None)
            # Computations already running must not publish either
            self._generation += 1
            if self._result is not None:
                self._state = DashboardState.READY
            else:
                self._state = DashboardState.IDLE

    def _take_pending(self, generation: Optional[int]):
        """Remove and return the pending payload (lock must be held)."""
        pending = self._pending
        if pending is None or (generation is not None and pending[0] != generation):
            return None
        self._pending = None
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        return pending

    def _run(self, generation: int) -> None:
        with self._lock:
            pending = self._take_pending(generation)
        if pending is not None:
            self._execute(pending)

    def _execute(self, pending) -> Optional[DashboardResult]:
        generation, records, preferences, now = pending
        result = compute_dashboard(records, preferences, now=now, **self.compute_options)

        with self._lock:
            if generation != self._generation:
                logger.debug(f"Discarding stale dashboard computation {generation}")
                return None
            self._result = result
            self._state = DashboardState.READY

        if self.listener is not None:
            self.listener(result)
        return result
