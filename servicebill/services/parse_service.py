from pydantic import BaseModel, ValidationError

from servicebill.llms.router import FallbackRouter
from servicebill.schemas.document import DocumentType, ServiceDetails
from servicebill.services.prompts import build_parse_prompt
from servicebill.utils.json_extract import extract_json_object
from servicebill.utils.logger import logger


class DocumentParseError(ValueError):
    """The model answered, but no usable JSON document could be read from it."""


class NoDetailsFoundError(ValueError):
    """The model answered with an empty document."""


class ParsedDocument(BaseModel):
    details: ServiceDetails
    provider: str
    model: str


async def parse_details(
    router: FallbackRouter,
    text: str,
    document_type: DocumentType = DocumentType.SERVICE,
) -> ParsedDocument:
    """Extract vehicle, customer and line items from free-form service notes.

    AllProvidersExhaustedError from the router propagates unchanged.
    """
    schema = ServiceDetails.model_json_schema(by_alias=True)
    prompt = build_parse_prompt(text, document_type, schema)
    response = await router.call_with_fallback(prompt, schema_hint=schema)

    try:
        data = extract_json_object(response.content)
    except ValueError as e:
        raise DocumentParseError(f"Model returned malformed JSON: {e}") from e
    if data is None:
        raise DocumentParseError("Could not extract JSON from response")

    try:
        details = ServiceDetails.model_validate(data)
    except ValidationError as e:
        raise DocumentParseError(f"Model returned an unexpected document shape: {e}") from e

    if not details.has_meaningful_data():
        raise NoDetailsFoundError(
            f"The provided text doesn't seem to contain any {document_type.value} details. "
            "Please provide more specific information."
        )

    logger.info(
        "document_parsed",
        extra={
            "document_type": document_type.value,
            "provider": response.provider,
            "model": response.model,
            "items": len(details.items),
        },
    )
    return ParsedDocument(details=details, provider=response.provider, model=response.model)
