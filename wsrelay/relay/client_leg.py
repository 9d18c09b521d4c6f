"""Client-facing side of a relay session."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from .pending import Payload

logger = logging.getLogger(__name__)


class ClientLeg:
    """Thin wrapper over the accepted ASGI WebSocket.

    ``close`` is idempotent: once a close was issued, or the peer went away,
    further closes are no-ops.
    """

    def __init__(self, ws: WebSocket) -> None:
        self._ws = ws
        self._close_sent = False

    @property
    def websocket(self) -> WebSocket:
        return self._ws

    @property
    def is_open(self) -> bool:
        return (
            not self._close_sent
            and self._ws.client_state == WebSocketState.CONNECTED
            and self._ws.application_state == WebSocketState.CONNECTED
        )

    async def receive(self) -> dict[str, Any]:
        return await self._ws.receive()

    async def send(self, payload: Payload) -> bool:
        if not self.is_open:
            return False
        try:
            if isinstance(payload, bytes):
                await self._ws.send_bytes(payload)
            else:
                await self._ws.send_text(payload)
        except WebSocketDisconnect:
            return False
        except Exception:
            logger.debug("client send failed", exc_info=True)
            return False
        return True

    async def close(self, code: int, reason: str = "") -> bool:
        if not self.is_open:
            return False
        self._close_sent = True
        try:
            await self._ws.close(code=code, reason=reason)
        except Exception:
            logger.debug("client close failed", exc_info=True)
            return False
        return True


__all__ = ["ClientLeg"]
