"""
Recovery of the JSON object embedded in a free-text model reply.

Models wrap JSON in prose or code fences. The first attempt takes the span
from the first "{" to the last "}"; when that span is not valid JSON
(stray braces in trailing prose), each "{" is tried as the start of a
complete object with an incremental decoder.
"""

import json
import logging
import re
from typing import Any, Dict, Optional

from .errors import JsonParseError, NoJsonFound

logger = logging.getLogger(__name__)

_JSON_SPAN = re.compile(r"\{[\s\S]*\}")


def _scan_for_object(text: str) -> Optional[Dict[str, Any]]:
    decoder = json.JSONDecoder()
    start = text.find("{")
    while start != -1:
        try:
            value, _ = decoder.raw_decode(text, start)
        except ValueError:
            value = None
        if isinstance(value, dict):
            return value
        start = text.find("{", start + 1)
    return None


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Parse the first JSON object found in text.

    Raises:
        NoJsonFound: text has no "{...}" span at all.
        JsonParseError: a span exists but no object inside it parses.
    """
    match = _JSON_SPAN.search(text or "")
    if not match:
        raise NoJsonFound()

    try:
        return json.loads(match.group())
    except ValueError as e:
        # JSONDecodeError, or an integer past the int digit limit
        logger.debug(f"Greedy JSON span failed to parse ({e}), scanning for an object")
        value = _scan_for_object(match.group())
        if value is None:
            raise JsonParseError() from e
        return value
