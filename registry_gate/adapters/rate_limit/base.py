"""Admission gate interfaces.

Callers depend on this abstraction (not the concrete implementation) so the
in-process gate can later be replaced by a shared store without touching the
submission service.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class GateSnapshot:
    """Point-in-time view of a gate's window state.

    Attributes:
        limit: Max admissions per window.
        window_seconds: Window duration in seconds.
        window_start: Clock reading at which the current window began.
        count: Admissions granted since ``window_start``.
    """

    limit: int
    window_seconds: float
    window_start: float
    count: int

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.count)


class AbstractRateGate(ABC):
    """Interface for blocking admission gates."""

    @abstractmethod
    def acquire(
        self,
        *,
        timeout: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Block until the caller is admitted.

        Args:
            timeout: Maximum seconds to wait for admission (None waits as
                long as needed).
            cancel_event: Event that aborts the wait when set.

        Raises:
            AcquireCancelledError: If the wait was aborted before admission.
        """
        raise NotImplementedError

    @abstractmethod
    def snapshot(self) -> GateSnapshot:
        """Return the current window state."""
        raise NotImplementedError
