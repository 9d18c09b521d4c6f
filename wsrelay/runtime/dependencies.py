"""Runtime dependency construction."""

from __future__ import annotations

import logging

from wsrelay.state import RuntimeDeps
from wsrelay.state.settings import AppSettings
from wsrelay.relay.bridge import RelayBridge
from wsrelay.relay.upstream import UpstreamConnector
from wsrelay.relay.headers import build_header_strategy

from .settings_loader import load_settings

logger = logging.getLogger(__name__)


async def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()

    header_strategy = build_header_strategy(settings.upstream)
    relay_bridge = RelayBridge(
        connector=UpstreamConnector(settings.upstream),
        header_strategy=header_strategy,
        limits=settings.limits,
    )

    logger.info(
        "relay target=%s header_mode=%s max_sessions=%s pending_max_messages=%s pending_max_bytes=%s overflow=%s",
        settings.upstream.target_url,
        header_strategy.name,
        relay_bridge.max_sessions,
        settings.limits.pending_max_messages or "unbounded",
        settings.limits.pending_max_bytes or "unbounded",
        settings.limits.pending_overflow,
    )

    return RuntimeDeps(
        relay_bridge=relay_bridge,
        settings=settings,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
