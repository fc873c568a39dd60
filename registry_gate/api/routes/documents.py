from typing import Annotated

from fastapi import APIRouter, Depends

from registry_gate.core.dependencies import get_submission_service
from registry_gate.schemas.submission import (
    GateStatusResponse,
    SubmitDocumentRequest,
    SubmitDocumentResponse,
)
from registry_gate.services.submission_service import DocumentSubmissionService

router = APIRouter(tags=["Documents"])

ServiceDep = Annotated[DocumentSubmissionService, Depends(get_submission_service)]


# Sync handlers run in FastAPI's threadpool, so a blocking admission wait
# does not stall the event loop.
@router.post("/documents", response_model=SubmitDocumentResponse)
def submit_document(payload: SubmitDocumentRequest, service: ServiceDep) -> SubmitDocumentResponse:
    """Put a document into circulation, waiting for admission if needed.

    Errors are rendered by the global exception handlers:
    503 when admission timed out, 502 when the registry rejected the document.
    """
    result = service.submit(payload.document, payload.signature)
    return SubmitDocumentResponse(
        registry_status_code=result.status_code,
        registry_response=result.body,
    )


@router.get("/gate", response_model=GateStatusResponse)
def gate_status(service: ServiceDep) -> GateStatusResponse:
    """Report how much of the current admission window is used."""
    snapshot = service.gate.snapshot()
    return GateStatusResponse(
        limit=snapshot.limit,
        window_seconds=snapshot.window_seconds,
        count=snapshot.count,
        remaining=snapshot.remaining,
    )
