from __future__ import annotations

import pytest

from wsrelay.relay.classify import NON_STRUCTURED, STRUCTURED_UNTYPED, classify_payload


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        ('{"type": "ping"}', "ping"),
        (b'{"kind": "order.update"}', "order.update"),
        ('{"event": " trade "}', "trade"),
        ('{"type": 5, "kind": "fallback"}', "fallback"),
        ('{"data": 1}', STRUCTURED_UNTYPED),
        ("[1, 2, 3]", STRUCTURED_UNTYPED),
        ("hello", NON_STRUCTURED),
        (b"\x00\xff\x10", NON_STRUCTURED),
        ("", NON_STRUCTURED),
    ],
)
def test_classify_payload(payload: str | bytes, expected: str) -> None:
    assert classify_payload(payload) == expected
