"""Pydantic schemas for the document submission endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from registry_gate.schemas.document import Document


class SubmitDocumentRequest(BaseModel):
    """Body of ``POST /v1/documents``."""

    document: Document = Field(..., description="Document to put into circulation.")
    signature: str = Field(
        ...,
        min_length=1,
        description="Detached signature of the document, forwarded verbatim.",
    )


class SubmitDocumentResponse(BaseModel):
    """Result of a document accepted by the registry."""

    status: str = Field("submitted", description="Always 'submitted' on success.")
    registry_status_code: int = Field(..., description="HTTP status returned by the registry.")
    registry_response: str = Field(..., description="Raw registry response body.")


class GateStatusResponse(BaseModel):
    """Current state of the admission window."""

    limit: int
    window_seconds: float
    count: int
    remaining: int
