"""Application-level exception types.

This module defines domain errors used across the gate, the registry adapter
and the HTTP layer, enabling consistent error handling, logging, and API
responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients.

    Fields are optional to keep shapes consistent without forcing every
    error to carry every key.
    """

    code: str
    message: str
    hint: str
    min_value: float
    actual_value: float
    http_status: int
    response_body: str
    retry_after: float
    waited_seconds: float
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input/config validation fails."""


class ConfigurationAppError(ValidationAppError, ValueError):
    """Raised when a component is constructed with invalid parameters."""


class AcquireCancelledError(AppError):
    """Raised when a caller stops waiting for admission (timeout or cancel)."""


class SubmissionFailedError(AppError):
    """Raised when the registry rejects a document or cannot be reached."""
