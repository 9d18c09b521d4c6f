"""Helpers for forwarding close codes between the two legs."""

from __future__ import annotations

from wsrelay.config.websocket import (
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_NO_STATUS_CODE,
    WS_CLOSE_REASON_MAX_BYTES,
)

# Codes a peer may put in a close frame (RFC 6455 section 7.4 plus the IANA registry).
_SENDABLE_STANDARD_CODES = frozenset({1000, 1001, 1002, 1003, 1007, 1008, 1009, 1010, 1011, 1012, 1013, 1014})
_APPLICATION_CODE_MIN = 3000
_APPLICATION_CODE_MAX = 4999


def is_sendable_close_code(code: int) -> bool:
    return code in _SENDABLE_STANDARD_CODES or _APPLICATION_CODE_MIN <= code <= _APPLICATION_CODE_MAX


def truncate_reason(reason: str, max_bytes: int = WS_CLOSE_REASON_MAX_BYTES) -> str:
    encoded = (reason or "").encode("utf-8")
    if len(encoded) <= max_bytes:
        return reason or ""
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


def forwardable_close(
    code: int | None,
    reason: str | None,
    *,
    fallback: tuple[int, str],
) -> tuple[int, str]:
    """Return a (code, reason) pair that can legally be sent in a close frame.

    A close without a status (1005) is forwarded as a plain normal closure.
    Codes that must never appear on the wire (1006, 1015, out of range) are
    replaced by ``fallback``.
    """
    if code is None or code == WS_CLOSE_NO_STATUS_CODE:
        return WS_CLOSE_NORMAL_CODE, ""
    if not is_sendable_close_code(int(code)):
        return fallback
    return int(code), truncate_reason(reason or "")


__all__ = ["forwardable_close", "is_sendable_close_code", "truncate_reason"]
