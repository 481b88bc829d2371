"""Strict parsing of JSON documents read from disk."""

from __future__ import annotations

import json


def load_json_document(text: str) -> object:
    """Parse ``text`` as strict JSON.

    Raises:
        ValueError: malformed JSON, ``NaN``/``Infinity`` literals, integers past the
            interpreter's digit limit, or nesting too deep to decode.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except RecursionError as exc:
        raise ValueError("JSON document is nested too deeply") from exc


def _reject_constant(name: str) -> object:
    raise ValueError(f"Non-standard JSON constant: {name}")
