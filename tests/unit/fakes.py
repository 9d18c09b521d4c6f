"""In-memory stand-ins for the client (Starlette) and upstream (websockets) connections."""

from __future__ import annotations

import time
import asyncio
from typing import Any
from collections.abc import Callable

from websockets.frames import Close
from websockets.protocol import State
from starlette.websockets import WebSocketState
from websockets.exceptions import ConnectionClosedOK, ConnectionClosedError

from wsrelay.relay.upstream_leg import UpstreamLeg
from wsrelay.config.limits import OVERFLOW_CLOSE
from wsrelay.state.settings import (
    AppSettings,
    LimitsSettings,
    ServerSettings,
    UpstreamSettings,
    WebSocketSettings,
)


class FakeClientWebSocket:
    """Mimics an accepted Starlette ``WebSocket``."""

    def __init__(self) -> None:
        self.client_state = WebSocketState.CONNECTED
        self.application_state = WebSocketState.CONNECTED
        self.sent: list[str | bytes] = []
        self.closes: list[tuple[int, str]] = []
        self._inbox: asyncio.Queue[Any] = asyncio.Queue()

    def push_text(self, text: str) -> None:
        self._inbox.put_nowait({"type": "websocket.receive", "text": text})

    def push_bytes(self, data: bytes) -> None:
        self._inbox.put_nowait({"type": "websocket.receive", "bytes": data})

    def push_disconnect(self, code: int, reason: str = "") -> None:
        self._inbox.put_nowait({"type": "websocket.disconnect", "code": code, "reason": reason})

    def push_error(self, exc: BaseException) -> None:
        self._inbox.put_nowait(exc)

    async def receive(self) -> dict[str, Any]:
        message = await self._inbox.get()
        if isinstance(message, BaseException):
            raise message
        if message["type"] == "websocket.disconnect":
            self.client_state = WebSocketState.DISCONNECTED
        return message

    async def send_text(self, text: str) -> None:
        self.sent.append(text)

    async def send_bytes(self, data: bytes) -> None:
        self.sent.append(data)

    async def close(self, code: int = 1000, reason: str | None = None) -> None:
        self.application_state = WebSocketState.DISCONNECTED
        self.closes.append((code, reason or ""))


class FakeUpstreamConnection:
    """Mimics a ``websockets`` client connection that already completed its handshake."""

    def __init__(self, *, echo: bool = False) -> None:
        self.state = State.OPEN
        self.echo = echo
        self.sent: list[str | bytes] = []
        self.closes: list[tuple[int, str]] = []
        self._inbox: asyncio.Queue[Any] = asyncio.Queue()

    def push(self, payload: str | bytes) -> None:
        self._inbox.put_nowait(payload)

    def push_close(self, code: int, reason: str = "") -> None:
        self._inbox.put_nowait(ConnectionClosedOK(Close(code, reason), None))

    def push_abnormal_close(self) -> None:
        self._inbox.put_nowait(ConnectionClosedError(None, None))

    async def recv(self) -> str | bytes:
        item = await self._inbox.get()
        if isinstance(item, BaseException):
            self.state = State.CLOSED
            raise item
        return item

    async def send(self, payload: str | bytes) -> None:
        if self.state is not State.OPEN:
            raise ConnectionClosedOK(None, Close(1000, ""))
        self.sent.append(payload)
        if self.echo:
            if payload == "__close__":
                self.push_close(4000, "done")
            else:
                self.push(payload)

    async def close(self, code: int = 1000, reason: str = "") -> None:
        self.closes.append((code, reason))
        self.state = State.CLOSED
        self._inbox.put_nowait(ConnectionClosedOK(Close(code, reason), Close(code, reason)))


class FakeConnector:
    """Upstream connector whose handshake completes when ``gate`` is set."""

    target_url = "wss://upstream.test"

    def __init__(self, *, error: BaseException | None = None, auto_open: bool = False, echo: bool = False) -> None:
        self.attempts: list[dict[str, str]] = []
        self.error = error
        self.auto_open = auto_open
        self.echo = echo
        self.gate: asyncio.Event | None = None if auto_open else asyncio.Event()
        self.conn: FakeUpstreamConnection | None = None

    async def open(self, headers: dict[str, str]) -> UpstreamLeg:
        self.attempts.append(dict(headers))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        self.conn = FakeUpstreamConnection(echo=self.echo)
        return UpstreamLeg(self.conn)


async def eventually(predicate: Callable[[], bool], *, timeout: float = 1.0) -> None:
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() >= deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.005)


def make_settings(
    *,
    target_url: str = "ws://127.0.0.1:9",
    header_mode: str = "bearer",
    allowed_origins: tuple[str, ...] = ("*",),
    max_connections: int = 10,
    pending_max_messages: int = 0,
    pending_max_bytes: int = 0,
    pending_overflow: str = OVERFLOW_CLOSE,
) -> AppSettings:
    return AppSettings(
        server=ServerSettings(host="127.0.0.1", port=3001, allowed_origins=allowed_origins),
        upstream=UpstreamSettings(
            target_url=target_url,
            header_mode=header_mode,
            user_agent="WhiteWeb/1.0.0",
            origin_override="https://app.example" if header_mode == "impersonate" else "",
            open_timeout_s=2.0,
            ping_interval_s=None,
            max_message_bytes=None,
        ),
        limits=LimitsSettings(
            max_concurrent_connections=max_connections,
            pending_max_messages=pending_max_messages,
            pending_max_bytes=pending_max_bytes,
            pending_overflow=pending_overflow,
        ),
        websocket=WebSocketSettings(token_param="token"),
    )


__all__ = [
    "FakeClientWebSocket",
    "FakeConnector",
    "FakeUpstreamConnection",
    "eventually",
    "make_settings",
]
