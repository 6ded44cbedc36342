from typing import Any

from servicebill.llms.errors import AllProvidersExhaustedError
from servicebill.llms.router import FallbackRouter
from servicebill.schemas.response import ModifyResponse
from servicebill.services.prompts import build_modify_prompt
from servicebill.utils.json_extract import extract_json_object
from servicebill.utils.logger import logger

PRESERVED_KEYS = ("invoiceNumber", "quotationNumber")
FALSE_WORDS = ("false", "no", "0")


def _failed(document: dict[str, Any], reason: str) -> ModifyResponse:
    return ModifyResponse(
        success=False,
        message=f"Failed to modify document details: {reason}",
        document=document,
    )


def _reported_success(value: Any) -> bool:
    # models sometimes quote booleans: "false", "No"
    if isinstance(value, str):
        return value.strip().lower() not in FALSE_WORDS
    return value is not False and value != 0


async def modify_document(
    router: FallbackRouter,
    document: dict[str, Any],
    instruction: str,
) -> ModifyResponse:
    """Apply a natural-language edit to a document. Never raises; failures keep the original."""
    try:
        response = await router.call_with_fallback(build_modify_prompt(document, instruction))
    except AllProvidersExhaustedError as e:
        logger.warning("modify_failed", extra={"reason": "providers_exhausted"})
        return _failed(document, e.summary)

    try:
        reply = extract_json_object(response.content)
    except ValueError as e:
        return _failed(document, f"invalid JSON in model reply ({e})")
    if reply is None:
        return _failed(document, "no JSON in model reply")

    updated = reply.get("document")
    if not isinstance(updated, dict):
        return _failed(document, "model reply has no 'document' object")

    for key in PRESERVED_KEYS:
        if key in document:
            updated[key] = document[key]

    success = _reported_success(reply.get("success", True))
    message = str(reply.get("message") or "Document updated.")
    return ModifyResponse(
        success=success,
        message=message,
        document=updated if success else document,
        provider=response.provider,
        model=response.model,
    )
