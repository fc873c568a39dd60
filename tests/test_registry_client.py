"""Tests for the HTTP registry adapter using httpx's mock transport."""

import httpx
import pytest

from registry_gate.adapters.registry import (
    HttpxDocumentSubmitter,
    SubmissionResult,
    create_document_submitter,
)
from registry_gate.core.config import RegistrySettings
from registry_gate.core.errors import ConfigurationAppError, SubmissionFailedError
from registry_gate.schemas.document import Document, build_create_document_body


def _submitter(handler) -> HttpxDocumentSubmitter:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpxDocumentSubmitter(base_url="https://registry.test", client=client)


class TestHttpxDocumentSubmitter:
    def test_posts_serialized_document(self, sample_document: Document) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text='{"value":"doc-uuid"}')

        result = _submitter(handler).submit(sample_document, "sample-signature")

        assert result == SubmissionResult(status_code=200, body='{"value":"doc-uuid"}')
        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "https://registry.test/api/v3/lk/documents/create"
        assert request.headers["Content-Type"] == "application/json"
        assert request.content == build_create_document_body(sample_document, "sample-signature")

    @pytest.mark.parametrize("status_code", [201, 400, 401, 500, 503])
    def test_non_200_is_a_failure(self, sample_document: Document, status_code: int) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, text="document rejected")

        with pytest.raises(SubmissionFailedError) as exc_info:
            _submitter(handler).submit(sample_document, "sig")

        error = exc_info.value
        assert error.code == "registry_rejected"
        assert error.details["http_status"] == status_code
        assert error.details["response_body"] == "document rejected"
        assert "document rejected" in error.message

    def test_long_error_body_is_truncated(self, sample_document: Document) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="x" * 10_000)

        with pytest.raises(SubmissionFailedError) as exc_info:
            _submitter(handler).submit(sample_document, "sig")

        assert len(exc_info.value.details["response_body"]) == 2000

    def test_transport_error_is_wrapped(self, sample_document: Document) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SubmissionFailedError) as exc_info:
            _submitter(handler).submit(sample_document, "sig")

        assert exc_info.value.code == "registry_unreachable"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert exc_info.value.details["context"]["error_type"] == "ConnectError"

    def test_injected_client_is_not_closed(self) -> None:
        client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        with HttpxDocumentSubmitter(base_url="https://registry.test", client=client):
            pass

        assert client.is_closed is False
        client.close()


class TestFactory:
    def test_builds_http_submitter_from_settings(self) -> None:
        submitter = create_document_submitter(
            RegistrySettings(base_url="https://example.test", create_path="/create")
        )
        try:
            assert isinstance(submitter, HttpxDocumentSubmitter)
            assert str(submitter.url) == "https://example.test/create"
        finally:
            submitter.close()

    def test_rejects_non_http_base_url(self) -> None:
        with pytest.raises(ConfigurationAppError) as exc_info:
            create_document_submitter(RegistrySettings(base_url="ftp://example.test"))

        assert exc_info.value.code == "registry_invalid_base_url"
