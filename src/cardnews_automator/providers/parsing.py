"""JSON extraction from free-form model output."""

from __future__ import annotations

import json
import re
from typing import Any

from .errors import MalformedResponse

_CODE_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


def _balanced_span(text: str, opener: str, closer: str) -> str | None:
    start = text.find(opener)
    if start == -1:
        return None
    depth = 0
    in_string = False
    escaped = False
    for i, char in enumerate(text[start:], start):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def extract_json(response: str) -> Any:
    """Extract a JSON value from AI response text, handling various formats.

    Tries, in order: the whole text, fenced code blocks, the first balanced
    ``{...}`` object, the first balanced ``[...]`` array.

    Raises:
        MalformedResponse: If no valid JSON is found.
    """
    text = (response or "").strip()
    if not text:
        raise MalformedResponse("Empty response")

    # Try 1: Direct JSON parse
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    # Try 2: Markdown code blocks
    for match in _CODE_BLOCK.findall(text):
        try:
            return json.loads(match.strip())
        except json.JSONDecodeError:
            continue

    # Try 3: Balanced object, then array
    for opener, closer in (("{", "}"), ("[", "]")):
        span = _balanced_span(text, opener, closer)
        if span is None:
            continue
        try:
            return json.loads(span)
        except json.JSONDecodeError:
            continue

    raise MalformedResponse(f"No valid JSON found in response: {text[:200]}")


def as_json_object(data: Any) -> dict[str, Any]:
    """Return decoded JSON as an object.

    A top-level array is unwrapped to its first object element.

    Raises:
        MalformedResponse: No object found.
    """
    if isinstance(data, list):
        data = next((item for item in data if isinstance(item, dict)), None)
    if not isinstance(data, dict):
        raise MalformedResponse("Response JSON is not an object")
    return data
