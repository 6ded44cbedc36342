from typing import Any

from pydantic import BaseModel

from servicebill.schemas.document import DocumentType, ServiceDetails


class ParseResponse(BaseModel):
    document_type: DocumentType
    details: ServiceDetails
    provider: str
    model: str


class ModifyResponse(BaseModel):
    success: bool
    message: str
    document: dict[str, Any]
    provider: str | None = None
    model: str | None = None
