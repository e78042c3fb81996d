"""Recover JSON objects from LLM text output.

Models asked for "JSON only" still answer with things like:

    Voici votre design :
    ```json
    { "layout": "asymmetric", ... }
    ```
    Bonne chance !

`parse_json_object` accepts the bare object, a fenced block, or an object
embedded in prose, and raises ValueError when nothing parseable is found.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Iterator, Optional

_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*\n?(.*?)```", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Return the content of the first fenced block, or the text unchanged."""
    match = _FENCE_RE.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return text


def clean_json_string(json_str: str) -> str:
    """Remove trailing commas before closing braces/brackets."""
    json_str = re.sub(r",\s*}", "}", json_str)
    json_str = re.sub(r",\s*]", "]", json_str)
    return json_str


def iter_json_objects(text: str) -> Iterator[str]:
    """
    Yield every balanced {...} span in `text`, scanning from each "{" in turn.

    Braces inside JSON string literals are ignored, so a description such as
    "curly {style}" does not end the scan early. Prose like "{style moderne}"
    is yielded too; callers keep the first span that parses.
    """
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for idx in range(start, len(text)):
            ch = text[idx]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    yield text[start:idx + 1]
                    break
        start = text.find("{", start + 1)


def extract_json_object(text: str) -> Optional[str]:
    """Return the first balanced {...} span in `text`, or None."""
    return next(iter_json_objects(text), None)


def _loads_object(candidate: str) -> Optional[Dict[str, Any]]:
    for attempt in (candidate, clean_json_string(candidate)):
        try:
            data = json.loads(attempt)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data
    return None


def parse_json_object(text: str) -> Dict[str, Any]:
    """
    Parse a JSON object out of raw model text.

    Order: whole text → first fenced block → each balanced object in the
    fenced content → each balanced object in the whole text.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError("Empty text provided for JSON parsing")

    stripped = text.strip()
    fenced = strip_code_fences(stripped)

    for candidate in (stripped, fenced):
        data = _loads_object(candidate)
        if data is not None:
            return data

    for source in (fenced, stripped):
        for embedded in iter_json_objects(source):
            data = _loads_object(embedded)
            if data is not None:
                return data

    raise ValueError(f"Could not parse JSON object from text: {stripped[:300]}")
