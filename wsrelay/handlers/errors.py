"""Error helpers for rejecting relay connections."""

from __future__ import annotations

import logging

from fastapi import WebSocket
from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)


async def reject_connection(ws: WebSocket, *, close_code: int, reason: str) -> None:
    # Accept first so the browser observes our close code instead of a failed handshake.
    if ws.application_state == WebSocketState.CONNECTING:
        try:
            await ws.accept()
        except Exception:
            # If accept fails, nothing else to do.
            return
    try:
        await ws.close(code=close_code, reason=reason)
    except Exception:
        logger.debug("close after rejection failed", exc_info=True)


async def safe_close(ws: WebSocket, *, close_code: int, reason: str) -> None:
    if ws.application_state != WebSocketState.CONNECTED or ws.client_state != WebSocketState.CONNECTED:
        return
    try:
        await ws.close(code=close_code, reason=reason)
    except Exception:
        logger.debug("websocket close failed", exc_info=True)


__all__ = ["reject_connection", "safe_close"]
