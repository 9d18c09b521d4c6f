from __future__ import annotations

import pytest
from fakes import make_settings

from wsrelay.relay.headers import (
    BearerHeaderStrategy,
    ImpersonationHeaderStrategy,
    build_header_strategy,
)


def test_bearer_strategy_forwards_token() -> None:
    strategy = BearerHeaderStrategy(user_agent="WhiteWeb/1.0.0")
    assert strategy.requires_credential is True
    assert strategy.build(" tok123 ") == {
        "Authorization": "Bearer tok123",
        "User-Agent": "WhiteWeb/1.0.0",
    }


def test_bearer_strategy_requires_token() -> None:
    with pytest.raises(ValueError):
        BearerHeaderStrategy(user_agent="").build(None)


def test_impersonation_strategy_ignores_credential() -> None:
    strategy = ImpersonationHeaderStrategy(user_agent="WhiteWeb/1.0.0", origin="https://app.example")
    assert strategy.requires_credential is False
    headers = strategy.build("tok123")
    assert headers == {"Origin": "https://app.example", "User-Agent": "WhiteWeb/1.0.0"}
    assert "Authorization" not in headers

    headers["Origin"] = "mutated"
    assert strategy.build(None)["Origin"] == "https://app.example"


def test_impersonation_strategy_requires_origin() -> None:
    with pytest.raises(ValueError):
        ImpersonationHeaderStrategy(user_agent="x", origin="")


@pytest.mark.parametrize(
    ("mode", "cls"),
    [("bearer", BearerHeaderStrategy), ("impersonate", ImpersonationHeaderStrategy)],
)
def test_build_header_strategy_selects_by_mode(mode: str, cls: type) -> None:
    strategy = build_header_strategy(make_settings(header_mode=mode).upstream)
    assert isinstance(strategy, cls)
    assert strategy.name == mode
