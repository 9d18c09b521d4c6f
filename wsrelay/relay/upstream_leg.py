"""Upstream side of a relay session."""

from __future__ import annotations

import logging
from typing import Any

from websockets.protocol import State
from websockets.exceptions import ConnectionClosed

from wsrelay.config.websocket import WS_CLOSE_NORMAL_CODE

from .pending import Payload

logger = logging.getLogger(__name__)


class UpstreamLeg:
    """Wrapper over a ``websockets`` client connection with an idempotent close."""

    def __init__(self, conn: Any) -> None:
        self._conn = conn
        self._close_sent = False

    @property
    def connection(self) -> Any:
        return self._conn

    @property
    def is_open(self) -> bool:
        return not self._close_sent and self._conn.state is State.OPEN

    async def recv(self) -> Payload:
        return await self._conn.recv()

    async def send(self, payload: Payload) -> bool:
        if not self.is_open:
            return False
        try:
            await self._conn.send(payload)
        except ConnectionClosed:
            return False
        except Exception:
            logger.debug("upstream send failed", exc_info=True)
            return False
        return True

    async def close(self, code: int = WS_CLOSE_NORMAL_CODE, reason: str = "") -> bool:
        if not self.is_open:
            return False
        self._close_sent = True
        try:
            await self._conn.close(code=code, reason=reason)
        except Exception:
            logger.debug("upstream close failed", exc_info=True)
            return False
        return True


__all__ = ["UpstreamLeg"]
