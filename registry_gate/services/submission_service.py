"""Document submission service combining admission control and delivery.

Every submission first passes through the admission gate and is only then
handed to the registry submitter. The gate's lock is never held while the
network call is in flight. A submission that fails after admission still
counts against the current window; slots are not refunded.
"""

from __future__ import annotations

import logging
import threading
import time

from registry_gate.adapters.rate_limit.base import AbstractRateGate
from registry_gate.adapters.registry.base import AbstractDocumentSubmitter, SubmissionResult
from registry_gate.core.errors import SubmissionFailedError
from registry_gate.schemas.document import Document

logger = logging.getLogger(__name__)

_DEFAULT = object()


class DocumentSubmissionService:
    """Put documents into circulation without exceeding the registry's rate."""

    def __init__(
        self,
        *,
        gate: AbstractRateGate,
        submitter: AbstractDocumentSubmitter,
        acquire_timeout: float | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            gate: Admission gate shared by every caller of this service.
            submitter: Registry client used once a caller is admitted.
            acquire_timeout: Default upper bound on the admission wait.
        """
        self.gate = gate
        self.submitter = submitter
        self.acquire_timeout = acquire_timeout

    def submit(
        self,
        document: Document,
        signature: str,
        *,
        timeout: float | None | object = _DEFAULT,
        cancel_event: threading.Event | None = None,
    ) -> SubmissionResult:
        """Wait for admission, then submit ``document`` to the registry.

        Args:
            document: Document to put into circulation.
            signature: Detached signature sent along with the document.
            timeout: Admission wait bound; defaults to ``acquire_timeout``.
                Pass None to wait as long as needed.
            cancel_event: Aborts the admission wait when set.

        Returns:
            SubmissionResult: Registry response for the accepted document.

        Raises:
            AcquireCancelledError: If admission was not granted in time.
            SubmissionFailedError: If the registry rejected the document.
        """
        wait_timeout = self.acquire_timeout if timeout is _DEFAULT else timeout

        started = time.perf_counter()
        self.gate.acquire(timeout=wait_timeout, cancel_event=cancel_event)
        admitted_after_ms = (time.perf_counter() - started) * 1000

        try:
            result = self.submitter.submit(document, signature)
        except SubmissionFailedError as exc:
            logger.warning(
                "document.submission_failed",
                extra={
                    "doc_id": document.doc_id,
                    "error_code": exc.code,
                    "http_status": (exc.details or {}).get("http_status"),
                },
            )
            raise

        logger.info(
            "document.submitted",
            extra={
                "doc_id": document.doc_id,
                "doc_type": document.doc_type,
                "http_status": result.status_code,
                "registry_response": result.body,
                "admission_wait_ms": round(admitted_after_ms, 2),
            },
        )
        return result

    def close(self) -> None:
        close = getattr(self.submitter, "close", None)
        if close is not None:
            close()
