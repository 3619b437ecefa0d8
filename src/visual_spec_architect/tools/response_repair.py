"""Best-effort cleanup of model output before JSON parsing."""

import json
import logging
import re
from typing import Any, Dict

from ..errors import MalformedResponseError


logger = logging.getLogger(__name__)

# Code fence on a line of its own, with an optional language tag. JSON strings
# cannot hold raw newlines, so fences quoted inside values are never matched.
CODE_FENCE = re.compile(r"^[ \t]*```[\w+-]*[ \t]*$", re.MULTILINE)


def repair_json_text(text: str) -> str:
    """Strip formatting noise so the model output has a chance to parse.
    
    Removes code fence lines, trims whitespace and, when both braces are present,
    keeps only the span from the first ``{`` to the last ``}``. Never raises;
    the result is not guaranteed to be valid JSON.
    
    Args:
        text: Raw response text
        
    Returns:
        Best-effort JSON string
    """
    if not text:
        return ""
    
    cleaned = CODE_FENCE.sub("", text).strip()
    
    first_brace = cleaned.find("{")
    last_brace = cleaned.rfind("}")
    if first_brace != -1 and last_brace > first_brace:
        cleaned = cleaned[first_brace:last_brace + 1]
    
    return cleaned


def parse_json_response(text: str) -> Dict[str, Any]:
    """Repair and parse a response that must hold a JSON object.
    
    Raises:
        MalformedResponseError: If the repaired text is not a JSON object
    """
    cleaned = repair_json_text(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {e}")
        logger.debug(f"Response text: {text}")
        raise MalformedResponseError(text, detail=str(e)) from e
    
    if not isinstance(data, dict):
        raise MalformedResponseError(text, detail=f"expected a JSON object, got {type(data).__name__}")
    return data
