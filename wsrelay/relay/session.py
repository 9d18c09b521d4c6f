"""Relay session: one client leg paired with one upstream leg."""

from __future__ import annotations

import uuid
import asyncio
import logging
from typing import Any
from collections.abc import Callable, Awaitable

from wsrelay.state.session import SessionPhase
from wsrelay.errors import PendingQueueFullError
from wsrelay.config.limits import OVERFLOW_CLOSE, OVERFLOW_REJECT
from wsrelay.config.websocket import (
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_GOING_AWAY_CODE,
    WS_CLOSE_TARGET_ERROR_CODE,
    WS_CLOSE_MISSING_TOKEN_CODE,
    WS_CLOSE_INTERNAL_ERROR_CODE,
    WS_CLOSE_TARGET_ERROR_REASON,
    WS_CLOSE_MISSING_TOKEN_REASON,
    WS_CLOSE_PENDING_OVERFLOW_CODE,
    WS_CLOSE_INTERNAL_ERROR_REASON,
    WS_CLOSE_PENDING_OVERFLOW_REASON,
)

from .client_leg import ClientLeg
from .classify import classify_payload
from .sources import pump_client, dial_upstream, pump_upstream
from .upstream_leg import UpstreamLeg
from .close_codes import forwardable_close
from .pending import Payload, PendingQueue, payload_size
from .events import (
    RelayEvent,
    ClientClosed,
    ClientFailed,
    ClientMessage,
    SessionAborted,
    UpstreamClosed,
    UpstreamFailed,
    UpstreamOpened,
    UpstreamMessage,
)

logger = logging.getLogger(__name__)

Handler = Callable[["RelaySession", Any], Awaitable[None]]


class RelaySession:
    """Bridge a client connection to a freshly dialed upstream connection.

    All events (client frames, upstream frames, open/close/error on either
    leg, server-side aborts) go through one queue and are applied in order by
    ``run``. The reader and dialer tasks only post events, so the pending
    queue and the phase have a single writer.

    Client payloads that arrive while the upstream handshake is in flight are
    buffered and flushed, in order, when the upstream opens and before any
    later client payload is handled. A close on either leg is propagated to
    the other one with the same code and reason; an upstream failure closes
    the client with 4002.
    """

    def __init__(
        self,
        *,
        client: ClientLeg,
        connector: Any,
        headers: dict[str, str] | None,
        pending_max_messages: int = 0,
        pending_max_bytes: int = 0,
        overflow_policy: str = OVERFLOW_CLOSE,
        session_id: str | None = None,
    ) -> None:
        self.session_id = session_id or uuid.uuid4().hex[:12]
        self._client = client
        self._connector = connector
        # None means the precondition failed: the session is rejected without dialing.
        self._headers = headers
        self._overflow_policy = overflow_policy
        self._pending = PendingQueue(max_messages=pending_max_messages, max_bytes=pending_max_bytes)
        self._upstream: UpstreamLeg | None = None
        self._phase = SessionPhase.INIT
        self._events: asyncio.Queue[RelayEvent] = asyncio.Queue()
        self._closed = asyncio.Event()

        self._dial_task: asyncio.Task | None = None
        self._client_task: asyncio.Task | None = None
        self._upstream_task: asyncio.Task | None = None

        # Close sent to a leg that finishes its handshake after the session began closing.
        self._late_close: tuple[int, str] = (WS_CLOSE_GOING_AWAY_CODE, "")

        self.dial_attempts = 0
        self.sent_upstream = 0
        self.sent_client = 0
        self.dropped = 0
        self.close_origin: str | None = None
        self.close_code: int | None = None
        self.close_reason: str = ""

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def upstream_ready(self) -> bool:
        return self._phase is SessionPhase.RELAYING

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def post(self, event: RelayEvent) -> None:
        self._events.put_nowait(event)

    def abort(self, code: int, reason: str) -> None:
        self.post(SessionAborted(code=code, reason=reason))

    async def wait_closed(self) -> None:
        await self._closed.wait()

    async def run(self) -> None:
        if self._phase is not SessionPhase.INIT:
            raise RuntimeError(f"relay session {self.session_id} already started")

        if self._headers is None:
            await self._reject(WS_CLOSE_MISSING_TOKEN_CODE, WS_CLOSE_MISSING_TOKEN_REASON)
            return

        self._phase = SessionPhase.CONNECTING_UPSTREAM
        self.dial_attempts += 1
        self._dial_task = asyncio.create_task(dial_upstream(self._connector, self._headers, self.post))
        self._client_task = asyncio.create_task(pump_client(self._client, self.post))
        try:
            while self._phase is not SessionPhase.CLOSED:
                event = await self._events.get()
                await self._transition(event)
        finally:
            await self._teardown()

    # Transition function

    async def _transition(self, event: RelayEvent) -> None:
        if self._phase.is_terminal and not isinstance(event, UpstreamOpened):
            logger.debug("session %s: ignoring %s in phase %s", self.session_id, type(event).__name__, self._phase)
            return
        handler = self._HANDLERS.get(type(event))
        if handler is None:
            logger.warning("session %s: no handler for %s", self.session_id, type(event).__name__)
            return
        await handler(self, event)

    async def _on_client_message(self, event: ClientMessage) -> None:
        if self._phase is SessionPhase.RELAYING and self._upstream is not None and self._upstream.is_open:
            await self._forward_to_upstream(event.payload)
            return
        if self._phase is SessionPhase.CONNECTING_UPSTREAM:
            try:
                self._pending.push(event.payload)
            except PendingQueueFullError as exc:
                await self._handle_overflow(exc)
            return
        # Upstream is closing; its close event is already on the way.
        self.dropped += 1

    async def _on_client_closed(self, event: ClientClosed) -> None:
        code, reason = forwardable_close(event.code, event.reason, fallback=(WS_CLOSE_NORMAL_CODE, ""))
        self._begin_closing("client", event.code, event.reason, late_close=(code, reason))
        if self._upstream is not None:
            await self._upstream.close(code, reason)
        self._finish()

    async def _on_client_failed(self, event: ClientFailed) -> None:
        logger.warning("session %s: client error: %s", self.session_id, event.error)
        self._begin_closing("client_error", None, str(event.error))
        if self._upstream is not None:
            await self._upstream.close()
        self._finish()

    async def _on_upstream_opened(self, event: UpstreamOpened) -> None:
        if self._phase is not SessionPhase.CONNECTING_UPSTREAM:
            await event.leg.close(*self._late_close)
            return

        self._upstream = event.leg
        self._upstream_task = asyncio.create_task(pump_upstream(event.leg, self.post))

        queued = len(self._pending)
        for payload in self._pending.drain():
            if not await self._forward_to_upstream(payload):
                # The reader task reports why the upstream went away.
                self.dropped += self._pending.clear()
                break
        self._phase = SessionPhase.RELAYING
        logger.info(
            "session %s: upstream connected url=%s flushed=%s",
            self.session_id,
            getattr(self._connector, "target_url", "?"),
            queued,
        )

    async def _on_upstream_message(self, event: UpstreamMessage) -> None:
        if not self._client.is_open:
            self.dropped += 1
            return
        if await self._client.send(event.payload):
            self.sent_client += 1
            self._log_payload("upstream->client", event.payload)
        else:
            self.dropped += 1

    async def _on_upstream_closed(self, event: UpstreamClosed) -> None:
        code, reason = forwardable_close(
            event.code,
            event.reason,
            fallback=(WS_CLOSE_TARGET_ERROR_CODE, WS_CLOSE_TARGET_ERROR_REASON),
        )
        self._begin_closing("upstream", event.code, event.reason)
        await self._client.close(code, reason)
        self._finish()

    async def _on_upstream_failed(self, event: UpstreamFailed) -> None:
        logger.warning("session %s: upstream error: %r", self.session_id, event.error)
        self._begin_closing("upstream_error", None, str(event.error))
        await self._client.close(WS_CLOSE_TARGET_ERROR_CODE, WS_CLOSE_TARGET_ERROR_REASON)
        if self._upstream is not None:
            await self._upstream.close()
        self._finish()

    async def _on_session_aborted(self, event: SessionAborted) -> None:
        self._begin_closing("server", event.code, event.reason, late_close=(event.code, event.reason))
        await self._client.close(event.code, event.reason)
        if self._upstream is not None:
            await self._upstream.close(event.code, event.reason)
        self._finish()

    _HANDLERS: dict[type, Handler] = {
        ClientMessage: _on_client_message,
        ClientClosed: _on_client_closed,
        ClientFailed: _on_client_failed,
        UpstreamOpened: _on_upstream_opened,
        UpstreamMessage: _on_upstream_message,
        UpstreamClosed: _on_upstream_closed,
        UpstreamFailed: _on_upstream_failed,
        SessionAborted: _on_session_aborted,
    }

    # Helpers

    async def _forward_to_upstream(self, payload: Payload) -> bool:
        if self._upstream is None or not await self._upstream.send(payload):
            self.dropped += 1
            return False
        self.sent_upstream += 1
        self._log_payload("client->upstream", payload)
        return True

    async def _handle_overflow(self, exc: PendingQueueFullError) -> None:
        if self._overflow_policy == OVERFLOW_REJECT:
            self.dropped += 1
            logger.warning(
                "session %s: pending queue full (%s msgs, %s bytes); dropping client message",
                self.session_id,
                exc.queued_messages,
                exc.queued_bytes,
            )
            return
        logger.warning(
            "session %s: pending queue full (%s msgs, %s bytes); closing session",
            self.session_id,
            exc.queued_messages,
            exc.queued_bytes,
        )
        await self._on_session_aborted(
            SessionAborted(code=WS_CLOSE_PENDING_OVERFLOW_CODE, reason=WS_CLOSE_PENDING_OVERFLOW_REASON)
        )

    def _begin_closing(
        self,
        origin: str,
        code: int | None,
        reason: str,
        *,
        late_close: tuple[int, str] | None = None,
    ) -> None:
        self._phase = SessionPhase.CLOSING
        self.close_origin = origin
        self.close_code = code
        self.close_reason = reason or ""
        if late_close is not None:
            self._late_close = late_close
        if self._dial_task is not None and not self._dial_task.done():
            self._dial_task.cancel()
        self.dropped += self._pending.clear()

    def _finish(self) -> None:
        self._phase = SessionPhase.CLOSED

    async def _reject(self, code: int, reason: str) -> None:
        self._phase = SessionPhase.REJECTED
        logger.info("session %s: rejected code=%s reason=%s", self.session_id, code, reason)
        self.close_origin = "rejected"
        self.close_code = code
        self.close_reason = reason
        await self._client.close(code, reason)
        self._phase = SessionPhase.CLOSED
        self._closed.set()

    def _log_payload(self, direction: str, payload: Payload) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        logger.debug(
            "session %s: %s kind=%s bytes=%s",
            self.session_id,
            direction,
            classify_payload(payload),
            payload_size(payload),
        )

    async def _teardown(self) -> None:
        try:
            if self._phase is not SessionPhase.CLOSED:
                # The loop was interrupted (cancellation or a bug); do not leave either leg open.
                self._begin_closing("internal", None, "session interrupted")
                await self._client.close(WS_CLOSE_INTERNAL_ERROR_CODE, WS_CLOSE_INTERNAL_ERROR_REASON)
                if self._upstream is not None:
                    await self._upstream.close()
                self._finish()

            tasks = [t for t in (self._dial_task, self._client_task, self._upstream_task) if t is not None]
            for task in tasks:
                if not task.done():
                    task.cancel()
            if tasks:
                await asyncio.gather(*tasks, return_exceptions=True)

            while not self._events.empty():
                event = self._events.get_nowait()
                if isinstance(event, UpstreamOpened):
                    await event.leg.close(*self._late_close)
        finally:
            self._closed.set()
            logger.info(
                "session %s: closed by=%s code=%s reason=%r to_upstream=%s to_client=%s dropped=%s",
                self.session_id,
                self.close_origin,
                self.close_code,
                self.close_reason,
                self.sent_upstream,
                self.sent_client,
                self.dropped,
            )


__all__ = ["RelaySession"]
