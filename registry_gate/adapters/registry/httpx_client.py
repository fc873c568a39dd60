"""HTTP registry client adapter."""

import logging

import httpx

from registry_gate.adapters.registry.base import AbstractDocumentSubmitter, SubmissionResult
from registry_gate.core.errors import SubmissionFailedError
from registry_gate.schemas.document import Document, build_create_document_body

logger = logging.getLogger(__name__)

# Response bodies are attached to errors for diagnostics; cap their size
_MAX_ERROR_BODY_CHARS = 2000


class HttpxDocumentSubmitter(AbstractDocumentSubmitter):
    """Client posting create-document requests to the registry over HTTP.

    Uses a pooled ``httpx.Client``; one instance may be shared by many
    threads.
    """

    def __init__(
        self,
        base_url: str,
        create_path: str = "/api/v3/lk/documents/create",
        timeout_seconds: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the registry client.

        Args:
            base_url: Registry API base URL.
            create_path: Path of the document creation endpoint.
            timeout_seconds: Timeout for requests in seconds.
            client: Preconfigured client (tests pass one with a mock transport).
        """
        self.client = client or httpx.Client(base_url=base_url, timeout=timeout_seconds)
        self._owns_client = client is None
        self.url = httpx.URL(base_url).join(create_path)

    def __enter__(self) -> "HttpxDocumentSubmitter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def submit(self, document: Document, signature: str) -> SubmissionResult:
        """POST the document payload and interpret the registry's answer.

        Args:
            document: Document to put into circulation.
            signature: Detached signature of the document.

        Returns:
            SubmissionResult: Status code and body of a 200 response.

        Raises:
            SubmissionFailedError: On a non-200 status or a transport error.
        """
        body = build_create_document_body(document, signature)

        try:
            response = self.client.post(
                self.url,
                content=body,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise SubmissionFailedError(
                code="registry_unreachable",
                message=f"Registry request failed: {exc}",
                details={"context": {"doc_id": document.doc_id, "error_type": type(exc).__name__}},
            ) from exc

        if response.status_code != 200:
            raise SubmissionFailedError(
                code="registry_rejected",
                message=f"Failed to execute request: {response.text[:_MAX_ERROR_BODY_CHARS]}",
                details={
                    "http_status": response.status_code,
                    "response_body": response.text[:_MAX_ERROR_BODY_CHARS],
                    "context": {"doc_id": document.doc_id},
                },
            )

        logger.debug(
            "registry.response",
            extra={"doc_id": document.doc_id, "http_status": response.status_code},
        )
        return SubmissionResult(status_code=response.status_code, body=response.text)
