"""Best-effort classification of relayed payloads for logs."""

from __future__ import annotations

from typing import Any

import orjson

NON_STRUCTURED = "non-structured"
STRUCTURED_UNTYPED = "json"

_KIND_KEYS = ("type", "kind", "event")


def classify_payload(payload: str | bytes) -> str:
    # Never raises: the result only feeds logging.
    try:
        decoded: Any = orjson.loads(payload)
    except Exception:
        return NON_STRUCTURED
    if isinstance(decoded, dict):
        for key in _KIND_KEYS:
            value = decoded.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return STRUCTURED_UNTYPED


__all__ = ["NON_STRUCTURED", "STRUCTURED_UNTYPED", "classify_payload"]
