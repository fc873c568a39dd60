"""Process-wide gate and service wiring for FastAPI routes.

Routes depend on ``get_submission_service`` only, so tests can swap the
service (or its gate) through ``app.dependency_overrides``.

The gate must be shared by every request handled by this process, so it is
cached in-module. If the gate configuration changes (primarily in tests) the
gate is rebuilt.
"""

from __future__ import annotations

import logging
import threading

from registry_gate.adapters.rate_limit.base import AbstractRateGate
from registry_gate.adapters.rate_limit.fixed_window import FixedWindowRateGate
from registry_gate.adapters.registry.factory import create_document_submitter
from registry_gate.core.config import settings
from registry_gate.services.submission_service import DocumentSubmissionService

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_gate: AbstractRateGate | None = None
_gate_config: tuple[int, float] | None = None
_service: DocumentSubmissionService | None = None


def get_rate_gate() -> AbstractRateGate:
    """Return the process-wide admission gate.

    Returns:
        AbstractRateGate: Gate configured from ``settings.gate``.
    """

    global _gate, _gate_config

    config = (settings.gate.limit, settings.gate.window_seconds)

    with _lock:
        if _gate is None or _gate_config != config:
            _gate = FixedWindowRateGate(
                limit=settings.gate.limit,
                window_seconds=settings.gate.window_seconds,
            )
            _gate_config = config
            logger.info(
                "rate_gate.configured",
                extra={"limit": config[0], "window_s": config[1]},
            )
        return _gate


def get_submission_service() -> DocumentSubmissionService:
    """Return the process-wide submission service bound to the current gate."""

    global _service

    gate = get_rate_gate()
    with _lock:
        if (
            _service is None
            or _service.gate is not gate
            or _service.acquire_timeout != settings.gate.acquire_timeout_seconds
        ):
            if _service is not None:
                _service.close()
            _service = DocumentSubmissionService(
                gate=gate,
                submitter=create_document_submitter(),
                acquire_timeout=settings.gate.acquire_timeout_seconds,
            )
        return _service


def reset_dependencies() -> None:
    """Drop cached instances so the next request rebuilds them."""

    global _gate, _gate_config, _service

    with _lock:
        if _service is not None:
            _service.close()
        _gate = None
        _gate_config = None
        _service = None
