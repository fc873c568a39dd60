"""Admission gate adapters.

This package provides a small abstraction layer so the service can start with
an in-process gate and later move to a shared store without changing the
callers.
"""

from registry_gate.adapters.rate_limit.base import AbstractRateGate, GateSnapshot
from registry_gate.adapters.rate_limit.fixed_window import FixedWindowRateGate

__all__ = [
    "AbstractRateGate",
    "FixedWindowRateGate",
    "GateSnapshot",
]
