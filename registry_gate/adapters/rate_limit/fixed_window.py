"""In-process fixed-window admission gate.

Notes:
- Per-process only: several processes sharing one registry account each
  enforce their own limit.
- Thread-safe: a single condition variable guards the window state, and it
  is released while a caller sleeps.
- After a stall the new window starts at the moment the waker resumes, not at
  ``window_start + window_seconds``. Under sustained overload the effective
  window can therefore be slightly shorter than configured.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from registry_gate.adapters.rate_limit.base import AbstractRateGate, GateSnapshot
from registry_gate.core.errors import AcquireCancelledError, ConfigurationAppError

logger = logging.getLogger(__name__)


class FixedWindowRateGate(AbstractRateGate):
    """Admit at most ``limit`` callers per fixed window, blocking the rest.

    Unlike a token bucket, capacity is not refilled gradually: the whole
    budget becomes available again once the window elapses, or once a blocked
    caller wakes up after waiting out the window.

    Callers are not admitted in FIFO order, but every waiter is admitted
    after at most one extra window once the gate stops being saturated.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        cancel_poll_interval: float = 0.05,
    ) -> None:
        """Initialize the gate.

        Args:
            limit: Maximum number of admissions per window.
            window_seconds: Window duration in seconds.
            clock: Monotonic time source returning seconds.
            cancel_poll_interval: How often a waiter with a ``cancel_event``
                checks whether it was cancelled.

        Raises:
            ConfigurationAppError: If any argument is not strictly positive.
        """
        if limit < 1:
            raise ConfigurationAppError(
                code="gate_invalid_limit",
                message="limit must be >= 1",
                details={"min_value": 1, "actual_value": limit},
            )
        if window_seconds <= 0:
            raise ConfigurationAppError(
                code="gate_invalid_window",
                message="window_seconds must be > 0",
                details={"actual_value": window_seconds},
            )
        if cancel_poll_interval <= 0:
            raise ConfigurationAppError(
                code="gate_invalid_poll_interval",
                message="cancel_poll_interval must be > 0",
                details={"actual_value": cancel_poll_interval},
            )

        self._limit = limit
        self._window_seconds = float(window_seconds)
        self._clock = clock
        self._cancel_poll_interval = cancel_poll_interval
        self._cond = threading.Condition(threading.Lock())

        self._window_start = clock()
        self._count = 0
        # Bumped on every reset so waiters can tell whether someone else
        # already opened a new window while they slept.
        self._generation = 0

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    def __repr__(self) -> str:  # pragma: no cover - representation only
        return (
            f"FixedWindowRateGate(limit={self._limit}, "
            f"window_seconds={self._window_seconds})"
        )

    def snapshot(self) -> GateSnapshot:
        with self._cond:
            return GateSnapshot(
                limit=self._limit,
                window_start=self._window_start,
                window_seconds=self._window_seconds,
                count=self._count,
            )

    def acquire(
        self,
        *,
        timeout: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Block until the caller is admitted into the current window.

        Args:
            timeout: Maximum seconds to wait (None waits as long as needed).
            cancel_event: Aborts the wait when set.

        Raises:
            AcquireCancelledError: If ``timeout`` elapsed or ``cancel_event``
                was set before admission. Window state is left untouched.
        """
        deadline = None if timeout is None else self._clock() + timeout

        with self._cond:
            now = self._clock()
            if now - self._window_start > self._window_seconds:
                self._reset(now)

            while self._count >= self._limit:
                generation = self._generation
                self._wait_for_window_end(generation, deadline, cancel_event)
                if self._generation == generation:
                    # First waker of this cycle opens the next window; the
                    # others see the new generation and recheck the count.
                    self._reset(self._clock())

            self._count += 1

    def _reset(self, now: float) -> None:
        self._window_start = now
        self._count = 0
        self._generation += 1
        self._cond.notify_all()

    def _remaining(self, now: float) -> float:
        # A clock reading before window_start must not stretch the wait
        # beyond one window, and one past the end means reset immediately.
        elapsed = now - self._window_start
        return min(self._window_seconds, max(0.0, self._window_seconds - elapsed))

    def _wait_for_window_end(
        self,
        generation: int,
        deadline: float | None,
        cancel_event: threading.Event | None,
    ) -> None:
        """Sleep (lock released) until the window ends or is reset elsewhere.

        Must be called with the lock held; returns with the lock held.
        """
        started = self._clock()
        # Time actually slept also ends the wait, so a clock that stalls or
        # jumps backwards cannot keep a caller suspended past one window.
        budget = self._remaining(started)
        slept = 0.0

        if budget > 0:
            logger.debug(
                "rate_gate.waiting",
                extra={
                    "limit": self._limit,
                    "window_s": self._window_seconds,
                    "wait_s": round(budget, 4),
                },
            )

        while self._generation == generation:
            now = self._clock()
            remaining = min(self._remaining(now), budget - slept)
            if remaining <= 0:
                return

            if cancel_event is not None and cancel_event.is_set():
                self._cancelled("cancelled", started, now)
            if deadline is not None and now >= deadline:
                self._cancelled("timeout", started, now)

            wait_s = remaining
            if deadline is not None:
                wait_s = min(wait_s, deadline - now)
            if cancel_event is not None:
                wait_s = min(wait_s, self._cancel_poll_interval)
            if not self._cond.wait(wait_s):
                slept += wait_s

    def _cancelled(self, reason: str, started: float, now: float) -> None:
        waited = max(0.0, now - started)
        logger.info(
            "rate_gate.acquire_cancelled",
            extra={"reason": reason, "waited_s": round(waited, 4)},
        )
        raise AcquireCancelledError(
            code=f"gate_acquire_{reason}",
            message=(
                "Timed out waiting for admission"
                if reason == "timeout"
                else "Admission wait was cancelled"
            ),
            details={
                "waited_seconds": round(waited, 4),
                "retry_after": self._remaining(now),
            },
        )
