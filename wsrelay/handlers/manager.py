"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import logging

from fastapi import WebSocket

from wsrelay.state.runtime import RuntimeDeps
from wsrelay.relay.session import RelaySession
from wsrelay.config.websocket import (
    WS_CLOSE_BUSY_REASON,
    WS_CLOSE_ORIGIN_REASON,
    WS_CLOSE_INTERNAL_ERROR_CODE,
    WS_CLOSE_TRY_AGAIN_LATER_CODE,
    WS_CLOSE_INTERNAL_ERROR_REASON,
    WS_CLOSE_POLICY_VIOLATION_CODE,
)

from .auth import get_credential
from .origin import is_origin_allowed
from .errors import safe_close, reject_connection

logger = logging.getLogger(__name__)


async def _prepare_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> bool:
    bridge = runtime_deps.relay_bridge
    origin = ws.headers.get("origin")
    if not is_origin_allowed(origin, runtime_deps.settings.server.allowed_origins):
        logger.warning("WebSocket rejected: origin %r not allowed", origin)
        await reject_connection(ws, close_code=WS_CLOSE_POLICY_VIOLATION_CODE, reason=WS_CLOSE_ORIGIN_REASON)
        return False

    if not bridge.reserve():
        logger.warning("WebSocket rejected: at capacity (%s)", bridge.max_sessions)
        await reject_connection(ws, close_code=WS_CLOSE_TRY_AGAIN_LATER_CODE, reason=WS_CLOSE_BUSY_REASON)
        return False

    try:
        await ws.accept()
    except Exception:
        bridge.release()
        raise
    return True


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    if not await _prepare_connection(ws, runtime_deps):
        return

    bridge = runtime_deps.relay_bridge
    session: RelaySession | None = None
    try:
        credential = get_credential(ws, runtime_deps.settings.websocket.token_param)
        session = bridge.new_session(ws, credential)
        logger.info(
            "WebSocket connection accepted session_id=%s. Active: %s",
            session.session_id,
            bridge.active_sessions() + 1,
        )
        await bridge.run_session(session)
    except Exception:
        # A broken session must never take the listener down.
        logger.exception("relay session %s failed", session.session_id if session else None)
        await safe_close(ws, close_code=WS_CLOSE_INTERNAL_ERROR_CODE, reason=WS_CLOSE_INTERNAL_ERROR_REASON)
    finally:
        if session is None:
            # run_session releases the slot itself once a session exists.
            bridge.release()
        logger.info(
            "WebSocket connection closed session_id=%s. Active: %s",
            session.session_id if session else None,
            bridge.active_sessions(),
        )


__all__ = ["handle_websocket_connection"]
