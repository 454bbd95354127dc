#!/usr/bin/env python3
# src/json_helpers.py

import json
from typing import Any, Dict, Tuple


def parse_json_or_raw(text: str) -> Tuple[Any, bool]:
    """
    Parse `text` as JSON.
    Returns (payload, True) on success, or ({"raw": text}, False) when the text is not JSON.
    """
    try:
        return json.loads(text), True
    except (json.JSONDecodeError, TypeError):
        return {"raw": text}, False


def load_json_object(raw: bytes) -> Dict[str, Any]:
    """Decode UTF-8 JSON bytes that must hold an object."""
    data = json.loads(raw.decode("utf-8"))
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")
    return data
