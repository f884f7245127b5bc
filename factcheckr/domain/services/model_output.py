"""Helpers for reading structured data out of free-form model text."""

import json
import re
from typing import Any, Optional

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.DOTALL)


def parse_model_json(text: Optional[str]) -> Optional[Any]:
    """Parse model output as JSON.

    Models often wrap JSON in a Markdown code fence; the fence is removed
    before parsing.

    Returns:
        The decoded value, or None if the text is not valid JSON
    """
    if not text:
        return None
    cleaned = text.strip()
    match = _FENCE_RE.match(cleaned)
    if match:
        cleaned = match.group(1).strip()
    try:
        return json.loads(cleaned)
    except (json.JSONDecodeError, ValueError):
        return None
