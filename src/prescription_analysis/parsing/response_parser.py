# ============================================================================
# src/prescription_analysis/parsing/response_parser.py
# ============================================================================
"""
LLM Response Parser

LLMs asked for "JSON only" still wrap it in prose or markdown:

    Here you go:
    ```json
    {"medications": [...]}
    ```

Attempts, first success wins:
1. Direct parse of the trimmed reply
2. Regex: fenced ```json block, else a {...} containing the marker field,
   else the outermost {...}
3. Strip markdown fences and parse again
4. json_repair on the outermost {...} (trailing commas, single quotes)

Anything that is not a JSON object raises ResponseParseError.
"""

import json
import logging
import re
from typing import Any, Dict, Optional

from json_repair import repair_json

from ..core.exceptions import ResponseParseError

logger = logging.getLogger(__name__)

FENCED_JSON_RE = re.compile(r"```(?:json)?\s*(\{[\s\S]*?\})\s*```", re.IGNORECASE)
OUTERMOST_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def _loads_object(candidate: str) -> Optional[Dict[str, Any]]:
    try:
        value = json.loads(candidate)
    except (json.JSONDecodeError, TypeError):
        return None
    return value if isinstance(value, dict) else None


def _regex_candidates(text: str, marker_field: Optional[str]):
    fenced = FENCED_JSON_RE.search(text)
    if fenced:
        yield fenced.group(1)

    if marker_field:
        marked = re.search(r'\{[\s\S]*"' + re.escape(marker_field) + r'"[\s\S]*\}', text)
        if marked:
            yield marked.group(0)

    outermost = OUTERMOST_OBJECT_RE.search(text)
    if outermost:
        yield outermost.group(0)


def parse_json_response(text: str, marker_field: Optional[str] = None) -> Dict[str, Any]:
    """
    Extract a JSON object from free-form completion text.

    Args:
        text: Raw completion text
        marker_field: Field name the expected object contains (e.g.
            "medications"); used to pick the right {...} span

    Returns:
        Parsed JSON object

    Raises:
        ResponseParseError: if no attempt yields a JSON object
    """
    if not text or not text.strip():
        raise ResponseParseError("Empty response text", raw_text=text or "")

    stripped = text.strip()

    # Try 1: Direct parse
    parsed = _loads_object(stripped)
    if parsed is not None:
        return parsed

    # Try 2: Regex extraction
    logger.debug("Direct JSON parsing failed, trying regex extraction")
    for candidate in _regex_candidates(stripped, marker_field):
        parsed = _loads_object(candidate)
        if parsed is not None:
            return parsed

    # Try 3: Strip markdown fences
    logger.debug("Regex extraction failed, stripping markdown fences")
    parsed = _loads_object(FENCE_RE.sub("", stripped).strip())
    if parsed is not None:
        return parsed

    # Try 4: Repair the outermost brace block
    outermost = OUTERMOST_OBJECT_RE.search(stripped)
    if outermost:
        try:
            repaired = repair_json(outermost.group(0), return_objects=True)
        except Exception as e:
            logger.debug(f"json_repair failed: {e}")
            repaired = None
        if isinstance(repaired, dict) and repaired:
            logger.warning(
                "json_repair fixed LLM response - some content may have been dropped. "
                f"Original (first 200 chars): {stripped[:200]}"
            )
            return repaired

    raise ResponseParseError(
        f"Could not parse JSON from response: {stripped[:200]}",
        raw_text=stripped,
    )
