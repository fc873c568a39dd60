"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any import that might build the global
settings, so tests never pick up a developer's .env file or real registry.
"""

import os

# CRITICAL: Set these before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("REGISTRY_BASE_URL", "https://registry.test")
os.environ.setdefault("GATE_LIMIT", "5")
os.environ.setdefault("GATE_WINDOW_SECONDS", "1.0")
os.environ.setdefault("LOG_FORMAT", "plain")

import pytest

from registry_gate.schemas.document import Description, Document, Product


@pytest.fixture
def sample_document() -> Document:
    """Document used by the registry's own integration examples."""
    return Document(
        doc_id="123",
        doc_status="ACTIVE",
        doc_type="LP_INTRODUCE_GOODS",
        import_request=True,
        owner_inn="123456789",
        participant_inn="987654321",
        producer_inn="123456789",
        production_date="2020-01-23",
        production_type="TYPE",
        reg_date="2020-01-23",
        reg_number="REG123",
        description=Description(participant_inn="987654321"),
        product=Product(
            certificate_document="DOC123",
            certificate_document_date="2020-01-23",
            certificate_document_number="NUM123",
            owner_inn="123456789",
            producer_inn="987654321",
            production_date="2020-01-23",
            tnved_code="CODE",
            uit_code="UIT123",
            uitu_code="UITU123",
        ),
    )
