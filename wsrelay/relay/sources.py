"""Tasks that feed a relay session's event queue.

Each source only posts events; none of them touches session state.
"""

from __future__ import annotations

from typing import Any
from collections.abc import Callable

from websockets.exceptions import ConnectionClosed

from .client_leg import ClientLeg
from .upstream_leg import UpstreamLeg
from .events import (
    RelayEvent,
    ClientClosed,
    ClientFailed,
    ClientMessage,
    UpstreamClosed,
    UpstreamFailed,
    UpstreamOpened,
    UpstreamMessage,
)

Post = Callable[[RelayEvent], None]


async def dial_upstream(connector: Any, headers: dict[str, str], post: Post) -> None:
    try:
        leg = await connector.open(headers)
    except Exception as exc:
        post(UpstreamFailed(error=exc))
        return
    post(UpstreamOpened(leg=leg))


async def pump_client(client: ClientLeg, post: Post) -> None:
    try:
        while True:
            message = await client.receive()
            msg_type = message.get("type")
            if msg_type == "websocket.receive":
                text = message.get("text")
                if text is not None:
                    post(ClientMessage(payload=text))
                    continue
                data = message.get("bytes")
                if data is not None:
                    post(ClientMessage(payload=bytes(data)))
                continue
            if msg_type == "websocket.disconnect":
                post(ClientClosed(code=message.get("code"), reason=message.get("reason") or ""))
                return
    except Exception as exc:
        post(ClientFailed(error=exc))


async def pump_upstream(leg: UpstreamLeg, post: Post) -> None:
    try:
        while True:
            payload = await leg.recv()
            post(UpstreamMessage(payload=payload))
    except ConnectionClosed as exc:
        if exc.rcvd is None:
            # No close frame from the target: abnormal closure.
            post(UpstreamFailed(error=exc))
        else:
            post(UpstreamClosed(code=exc.rcvd.code, reason=exc.rcvd.reason))
    except Exception as exc:
        post(UpstreamFailed(error=exc))


__all__ = ["dial_upstream", "pump_client", "pump_upstream"]
