"""Registry adapter layer - delivers documents to the remote registry API."""

from registry_gate.adapters.registry.base import AbstractDocumentSubmitter, SubmissionResult
from registry_gate.adapters.registry.factory import create_document_submitter
from registry_gate.adapters.registry.httpx_client import HttpxDocumentSubmitter

__all__ = [
    "AbstractDocumentSubmitter",
    "HttpxDocumentSubmitter",
    "SubmissionResult",
    "create_document_submitter",
]
