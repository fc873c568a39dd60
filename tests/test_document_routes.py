"""Tests for the document submission API routes."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from registry_gate.adapters.rate_limit.fixed_window import FixedWindowRateGate
from registry_gate.adapters.registry.base import AbstractDocumentSubmitter, SubmissionResult
from registry_gate.core.app_factory import create_app
from registry_gate.core.dependencies import get_submission_service
from registry_gate.core.errors import SubmissionFailedError
from registry_gate.services.submission_service import DocumentSubmissionService


class StubSubmitter(AbstractDocumentSubmitter):
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.documents = []

    def submit(self, document, signature):
        self.documents.append((document, signature))
        if self.error is not None:
            raise self.error
        return SubmissionResult(status_code=200, body='{"value":"doc-uuid"}')


@pytest.fixture
def submitter() -> StubSubmitter:
    return StubSubmitter()


@pytest.fixture
def service(submitter: StubSubmitter) -> DocumentSubmissionService:
    gate = FixedWindowRateGate(limit=2, window_seconds=60, clock=Mock(return_value=10.0))
    return DocumentSubmissionService(gate=gate, submitter=submitter, acquire_timeout=0)


@pytest.fixture
def client(service: DocumentSubmissionService) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_submission_service] = lambda: service
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def request_body() -> dict:
    return {
        "document": {
            "doc_id": "123",
            "doc_status": "ACTIVE",
            "doc_type": "LP_INTRODUCE_GOODS",
            "importRequest": True,
            "owner_inn": "123456789",
            "description": {"participantInn": "987654321"},
            "product": {"uit_code": "UIT123", "tnved_code": "CODE"},
        },
        "signature": "sample-signature",
    }


def test_submit_document_success(
    client: TestClient, submitter: StubSubmitter, request_body: dict
) -> None:
    response = client.post("/v1/documents", json=request_body)

    assert response.status_code == 200
    assert response.json() == {
        "status": "submitted",
        "registry_status_code": 200,
        "registry_response": '{"value":"doc-uuid"}',
    }
    document, signature = submitter.documents[0]
    assert document.import_request is True
    assert document.description.participant_inn == "987654321"
    assert signature == "sample-signature"


def test_saturated_gate_returns_503_with_retry_after(
    client: TestClient, request_body: dict
) -> None:
    assert client.post("/v1/documents", json=request_body).status_code == 200
    assert client.post("/v1/documents", json=request_body).status_code == 200

    response = client.post("/v1/documents", json=request_body)

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "gate_acquire_timeout"
    assert response.headers["Retry-After"] == "60"


def test_registry_rejection_returns_502(
    client: TestClient,
    submitter: StubSubmitter,
    service: DocumentSubmissionService,
    request_body: dict,
) -> None:
    submitter.error = SubmissionFailedError(
        code="registry_rejected",
        message="Failed to execute request: invalid signature",
        details={"http_status": 400, "response_body": "invalid signature"},
    )

    response = client.post("/v1/documents", json=request_body)

    assert response.status_code == 502
    error = response.json()["error"]
    assert error["code"] == "registry_rejected"
    assert error["details"]["http_status"] == 400
    assert service.gate.snapshot().count == 1


def test_missing_signature_is_rejected(client: TestClient, request_body: dict) -> None:
    del request_body["signature"]

    response = client.post("/v1/documents", json=request_body)

    assert response.status_code == 422


def test_gate_status_reports_window_usage(client: TestClient, request_body: dict) -> None:
    client.post("/v1/documents", json=request_body)

    response = client.get("/v1/gate")

    assert response.status_code == 200
    assert response.json() == {
        "limit": 2,
        "window_seconds": 60.0,
        "count": 1,
        "remaining": 1,
    }


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
