"""
Extraction of the JSON object embedded in a model reply.

Chat models often wrap the requested JSON in prose or code fences, so the
reply is scanned for the first top-level brace-balanced span that decodes
to a JSON object.
"""

import json
from typing import Any, Dict, Optional

from app.core.exceptions import ExternalResponseMalformedError


def _balanced_end(text: str, start: int) -> Optional[int]:
    """
    Index just past the ``}`` closing the ``{`` at ``start``.

    Braces inside JSON strings do not count. None when the span never
    closes, as with a reply cut off mid-object.
    """
    depth = 0
    in_string = False
    escaped = False

    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1

    return None


def extract_json_object(reply: str) -> Dict[str, Any]:
    """
    Return the first JSON object found in ``reply``.

    Only top-level spans are candidates: an object nested inside a span
    that failed to decode is never returned on its own.

    Raises:
        ExternalResponseMalformedError: If no JSON object can be decoded,
            or the reply ends inside an unclosed object
    """
    if not reply:
        raise ExternalResponseMalformedError("Empty response from model")

    start = reply.find("{")
    while start != -1:
        end = _balanced_end(reply, start)
        if end is None:
            raise ExternalResponseMalformedError("Failed to parse AI response")

        try:
            value = json.loads(reply[start:end])
        except json.JSONDecodeError:
            value = None

        if isinstance(value, dict):
            return value
        start = reply.find("{", end)

    raise ExternalResponseMalformedError("Failed to parse AI response")
