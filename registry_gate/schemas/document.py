"""Pydantic schemas for registry documents and the create-document payload.

The registry expects a compact JSON object whose key order and key spelling
(mixed snake_case and camelCase) must be reproduced exactly. Field declaration
order below is the wire order.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Description(BaseModel):
    """Free-form document description block."""

    model_config = ConfigDict(populate_by_name=True)

    participant_inn: str | None = Field(
        default=None,
        alias="participantInn",
        description="Taxpayer id of the participant submitting the document.",
    )


class Product(BaseModel):
    """A single labelled product introduced into circulation."""

    certificate_document: str | None = None
    certificate_document_date: str | None = None
    certificate_document_number: str | None = None
    owner_inn: str | None = None
    producer_inn: str | None = None
    production_date: str | None = None
    tnved_code: str | None = Field(
        default=None, description="Commodity nomenclature (TN VED) code."
    )
    uit_code: str | None = Field(default=None, description="Unique item identifier.")
    uitu_code: str | None = Field(
        default=None, description="Unique identifier of the transport package."
    )


class Document(BaseModel):
    """Document to be put into circulation through the registry."""

    model_config = ConfigDict(populate_by_name=True)

    doc_id: str | None = None
    doc_status: str | None = None
    doc_type: str | None = Field(
        default=None, description="Registry document type, e.g. LP_INTRODUCE_GOODS."
    )
    import_request: bool = Field(default=False, alias="importRequest")
    owner_inn: str | None = None
    participant_inn: str | None = None
    producer_inn: str | None = None
    production_date: str | None = None
    production_type: str | None = None
    reg_date: str | None = None
    reg_number: str | None = None
    description: Description = Field(default_factory=Description)
    product: Product = Field(default_factory=Product)


class CreateDocumentRequest(BaseModel):
    """Wire payload for the registry's document creation endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    doc_id: str | None
    doc_status: str | None
    doc_type: str | None
    import_request: bool = Field(alias="importRequest")
    owner_inn: str | None
    participant_inn: str | None
    producer_inn: str | None
    production_date: str | None
    production_type: str | None
    reg_date: str | None
    reg_number: str | None
    description: Description
    products: list[Product] = Field(min_length=1, max_length=1)
    signature: str

    @classmethod
    def from_document(cls, document: Document, signature: str) -> "CreateDocumentRequest":
        """Build the payload for ``document`` signed with ``signature``."""
        return cls(
            doc_id=document.doc_id,
            doc_status=document.doc_status,
            doc_type=document.doc_type,
            import_request=document.import_request,
            owner_inn=document.owner_inn,
            participant_inn=document.participant_inn,
            producer_inn=document.producer_inn,
            production_date=document.production_date,
            production_type=document.production_type,
            reg_date=document.reg_date,
            reg_number=document.reg_number,
            description=document.description,
            products=[document.product],
            signature=signature,
        )

    def to_json(self) -> str:
        """Serialize to the compact JSON string the registry expects."""
        return self.model_dump_json(by_alias=True)


def build_create_document_body(document: Document, signature: str) -> bytes:
    """Return the UTF-8 request body for submitting ``document``."""
    return CreateDocumentRequest.from_document(document, signature).to_json().encode("utf-8")
