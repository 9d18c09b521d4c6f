from __future__ import annotations

import time
from collections.abc import Iterator

import pytest
from fakes import FakeConnector, make_settings
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from wsrelay.server import app
from wsrelay.state import RuntimeDeps
from wsrelay.relay.bridge import RelayBridge
from wsrelay.relay.headers import build_header_strategy


def _deps(connector: FakeConnector, **kwargs) -> RuntimeDeps:
    settings = make_settings(**kwargs)
    return RuntimeDeps(
        relay_bridge=RelayBridge(
            connector=connector,
            header_strategy=build_header_strategy(settings.upstream),
            limits=settings.limits,
        ),
        settings=settings,
    )


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    monkeypatch.setenv("RELAY_TARGET_URL", "ws://127.0.0.1:9")
    monkeypatch.delenv("RELAY_HEADER_MODE", raising=False)
    with TestClient(app) as test_client:
        yield test_client


def test_root_and_health(client: TestClient) -> None:
    root = client.get("/")
    assert root.status_code == 200
    assert root.json()["service"] == "wsrelay"

    for path in ("/health", "/healthz"):
        response = client.get(path)
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "sessions": 0}


def test_unknown_paths_get_the_banner(client: TestClient) -> None:
    response = client.get("/some/probe/path", headers={"origin": "https://app.example"})
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["service"] == "wsrelay"
    assert response.headers["access-control-allow-origin"] == "*"


def test_missing_token_is_rejected_without_upstream_attempt(client: TestClient) -> None:
    connector = FakeConnector(auto_open=True)
    app.state.runtime_deps = _deps(connector)

    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect("/") as ws:
            ws.receive_text()

    assert exc.value.code == 4001
    assert exc.value.reason == "Missing token parameter"
    assert connector.attempts == []


def test_disallowed_origin_is_rejected(client: TestClient) -> None:
    connector = FakeConnector(auto_open=True)
    app.state.runtime_deps = _deps(connector, allowed_origins=("https://app.example",))

    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect("/?token=tok123", headers={"origin": "https://evil.example"}) as ws:
            ws.receive_text()

    assert exc.value.code == 1008
    assert connector.attempts == []


def test_capacity_is_enforced(client: TestClient) -> None:
    connector = FakeConnector(auto_open=True, echo=True)
    app.state.runtime_deps = _deps(connector, max_connections=1)

    with client.websocket_connect("/?token=tok123") as first:
        first.send_text("hold")
        assert first.receive_text() == "hold"
        assert client.get("/health").json() == {"status": "ok", "sessions": 1}

        with pytest.raises(WebSocketDisconnect) as exc:
            with client.websocket_connect("/?token=tok123") as second:
                second.receive_text()
        assert exc.value.code == 1013

        first.send_text("__close__")
        with pytest.raises(WebSocketDisconnect):
            first.receive_text()

    # The slot comes back once the server side of the first session has finished.
    bridge = app.state.runtime_deps.relay_bridge
    deadline = time.monotonic() + 1.0
    while bridge.active_sessions() and time.monotonic() < deadline:
        time.sleep(0.005)
    assert bridge.active_sessions() == 0
    assert bridge.reserve()


def test_relay_end_to_end(client: TestClient) -> None:
    connector = FakeConnector(auto_open=True, echo=True)
    app.state.runtime_deps = _deps(connector)

    with client.websocket_connect("/?token=tok123") as ws:
        ws.send_text("A")
        assert ws.receive_text() == "A"
        ws.send_bytes(b"\x01\x02")
        assert ws.receive_bytes() == b"\x01\x02"

        ws.send_text("__close__")
        with pytest.raises(WebSocketDisconnect) as exc:
            ws.receive_text()

    assert exc.value.code == 4000
    assert exc.value.reason == "done"
    assert connector.attempts[0]["Authorization"] == "Bearer tok123"
