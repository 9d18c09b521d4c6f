from __future__ import annotations

import pytest

from wsrelay.relay.close_codes import forwardable_close, truncate_reason, is_sendable_close_code

FALLBACK = (4002, "Target server error")


@pytest.mark.parametrize("code", [1000, 1001, 1008, 1011, 1013, 3000, 4001, 4999])
def test_sendable_codes_pass_through(code: int) -> None:
    assert is_sendable_close_code(code)
    assert forwardable_close(code, "why", fallback=FALLBACK) == (code, "why")


@pytest.mark.parametrize("code", [1004, 1006, 1015, 999, 2000, 5000])
def test_reserved_codes_use_fallback(code: int) -> None:
    assert not is_sendable_close_code(code)
    assert forwardable_close(code, "why", fallback=FALLBACK) == FALLBACK


def test_missing_status_becomes_normal_closure() -> None:
    assert forwardable_close(1005, "", fallback=FALLBACK) == (1000, "")
    assert forwardable_close(None, "ignored", fallback=FALLBACK) == (1000, "")


def test_long_reason_is_truncated_on_character_boundary() -> None:
    reason = "é" * 100  # 200 bytes
    truncated = truncate_reason(reason)
    assert len(truncated.encode("utf-8")) <= 123
    assert truncated == "é" * 61
    assert forwardable_close(1000, reason, fallback=FALLBACK) == (1000, truncated)
