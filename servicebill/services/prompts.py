import json
from typing import Any

from servicebill.schemas.document import DocumentType

_PRESERVE_RULES = (
    "Your most important task is to preserve the item descriptions exactly as they are "
    "written, without correcting spelling or expanding abbreviations. For example, if the "
    'user enters "oilfltr" or "brak pads", you must output "oilfltr" or "brak pads" exactly.\n'
    'Do NOT expand these specific shortcuts: "r&r", "Lh rh", "Fr rr", "Strng". Keep them as they are.'
)

_PURPOSE = {
    DocumentType.INVOICE: "to create an INVOICE",
    DocumentType.QUOTATION: "to create a QUOTATION",
    DocumentType.RECEIPT: "to create a RECEIPT",
    DocumentType.SERVICE: "",
}

_NOTES = {
    DocumentType.QUOTATION: "This is for a quotation, not a final invoice. ",
    DocumentType.RECEIPT: "This is for a receipt, not a final invoice. ",
}


def build_parse_prompt(text: str, document_type: DocumentType, schema: dict[str, Any]) -> str:
    purpose = _PURPOSE[document_type]
    intro = "You are a helpful assistant that extracts vehicle service details from text"
    if purpose:
        intro = f"{intro} {purpose}"
    return f"""{intro}, supporting both English and Telugu.

{_PRESERVE_RULES}

Extract the following information:
- vehicleNumber: The vehicle number.
- customerName: The customer name.
- carModel: The car model.
- items: A list of items with their description, unitPrice, quantity, and total.

{_NOTES.get(document_type, "")}If a field is not found, leave it blank. Output the item prices as numbers.

Text to extract:
{text}

Return ONLY a valid JSON object matching this schema:
{json.dumps(schema, indent=2)}"""


def build_modify_prompt(document: dict[str, Any], instruction: str) -> str:
    return f"""You are an AI assistant that modifies a JSON document based on a user's request.

Your task is to intelligently update the JSON based on the user's request.
- The request could be to add, remove, or update line items in the 'items' array.
- The request could also be to add or update top-level fields like 'customerName', 'vehicleNumber', or 'carModel', especially if they are empty or need correction.
- Recalculate totals if necessary.
- The 'invoiceNumber' or 'quotationNumber' key and its value MUST be preserved from the original document.

Current Document Details (JSON):
{json.dumps(document, ensure_ascii=False, indent=2)}

User's Modification Request:
{instruction}

Respond with ONLY a JSON object of the form
{{"success": true, "message": "<what you changed>", "document": {{...the complete updated document...}}}}"""
