"""Utility helpers for extracting JSON payloads from model responses."""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Iterator, Optional

_JSON_BLOCK = re.compile(r"```(?:json|JSON)?\s*(\{.*?\})\s*```", re.DOTALL)
_DECODER = json.JSONDecoder()


def _as_object(candidate: str) -> Optional[Dict[str, Any]]:
    try:
        value = json.loads(candidate)
    except (TypeError, json.JSONDecodeError):
        return None
    return value if isinstance(value, dict) else None


def iter_json_objects(text: str) -> Iterator[Dict[str, Any]]:
    """Yield every JSON object found in ``text``, most likely answer first.

    Order: the whole text, fenced code blocks, then an object decoded from
    each opening brace left to right.
    """

    if not isinstance(text, str):
        return

    payload = _as_object(text.strip())
    if payload is not None:
        yield payload
        return

    for block in _JSON_BLOCK.finditer(text):
        payload = _as_object(block.group(1))
        if payload is not None:
            yield payload

    start = text.find("{")
    while start != -1:
        try:
            value, _ = _DECODER.raw_decode(text, start)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, dict):
            yield value
        start = text.find("{", start + 1)


def extract_json(text: str) -> Dict[str, Any]:
    """Extract the first JSON object from an arbitrary text snippet."""

    for payload in iter_json_objects(text):
        return payload
    raise ValueError("Could not extract JSON object from response")
