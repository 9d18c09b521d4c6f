"""Origin policy for incoming relay connections."""

from __future__ import annotations

from collections.abc import Iterable

from wsrelay.config.server import ANY_ORIGIN


def _normalize(origin: str) -> str:
    return origin.strip().rstrip("/").lower()


def is_origin_allowed(origin: str | None, allowed: Iterable[str]) -> bool:
    allowed_set = {_normalize(o) for o in allowed if o and o.strip()}
    if ANY_ORIGIN in allowed_set:
        return True
    if not origin or not origin.strip():
        # Non-browser clients send no Origin; only an open policy admits them.
        return False
    return _normalize(origin) in allowed_set


__all__ = ["is_origin_allowed"]
