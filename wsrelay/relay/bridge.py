"""Factory and registry for relay sessions."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import WebSocket

from wsrelay.state.settings import LimitsSettings
from wsrelay.config.websocket import WS_CLOSE_GOING_AWAY_CODE, WS_CLOSE_SHUTDOWN_REASON

from .session import RelaySession
from .client_leg import ClientLeg
from .headers import HeaderStrategy

logger = logging.getLogger(__name__)

_SHUTDOWN_GRACE_S = 5.0


class RelayBridge:
    def __init__(self, *, connector: Any, header_strategy: HeaderStrategy, limits: LimitsSettings) -> None:
        self._connector = connector
        self._header_strategy = header_strategy
        self._limits = limits
        self._max_sessions = max(1, int(limits.max_concurrent_connections))
        self._reserved = 0
        self._sessions: set[RelaySession] = set()

    @property
    def requires_credential(self) -> bool:
        return self._header_strategy.requires_credential

    @property
    def max_sessions(self) -> int:
        return self._max_sessions

    def active_sessions(self) -> int:
        return len(self._sessions)

    def reserve(self) -> bool:
        """Claim an admission slot before the client is accepted.

        The slot is released by ``run_session``, or by ``release`` when no
        session gets to run.
        """
        if self._reserved >= self._max_sessions:
            return False
        self._reserved += 1
        return True

    def release(self) -> None:
        self._reserved = max(0, self._reserved - 1)

    def new_session(self, ws: WebSocket, credential: str | None) -> RelaySession:
        headers: dict[str, str] | None = None
        if credential or not self._header_strategy.requires_credential:
            headers = self._header_strategy.build(credential)
        return RelaySession(
            client=ClientLeg(ws),
            connector=self._connector,
            headers=headers,
            pending_max_messages=self._limits.pending_max_messages,
            pending_max_bytes=self._limits.pending_max_bytes,
            overflow_policy=self._limits.pending_overflow,
        )

    async def run_session(self, session: RelaySession) -> None:
        self._sessions.add(session)
        try:
            await session.run()
        finally:
            self.release()
            self._sessions.discard(session)

    async def shutdown(self) -> None:
        sessions = list(self._sessions)
        if not sessions:
            return
        logger.info("closing %s live relay sessions", len(sessions))
        for session in sessions:
            session.abort(WS_CLOSE_GOING_AWAY_CODE, WS_CLOSE_SHUTDOWN_REASON)
        _done, pending = await asyncio.wait(
            [asyncio.create_task(s.wait_closed()) for s in sessions],
            timeout=_SHUTDOWN_GRACE_S,
        )
        for task in pending:
            task.cancel()
        if pending:
            logger.warning("%s relay sessions did not close within %.1fs", len(pending), _SHUTDOWN_GRACE_S)


__all__ = ["RelayBridge"]
