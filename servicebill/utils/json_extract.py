import json
import re
from typing import Any

# Greedy: from the first "{" to the last "}" so nested objects stay whole.
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def extract_json_object(text: str) -> dict[str, Any] | None:
    """Pull the JSON object out of a model reply that may wrap it in prose or code fences.

    Returns None when the reply holds no "{...}" span. Raises ValueError when the
    span is there but does not decode to a JSON object.
    """
    if not text:
        return None
    match = _OBJECT_RE.search(text)
    if not match:
        return None
    parsed = json.loads(match.group(0))
    if not isinstance(parsed, dict):
        raise ValueError("Extracted JSON is not an object")
    return parsed
