"""Dialing the fixed upstream endpoint."""

from __future__ import annotations

import logging

import websockets

from wsrelay.state.settings import UpstreamSettings

from .upstream_leg import UpstreamLeg

logger = logging.getLogger(__name__)


class UpstreamConnector:
    def __init__(self, settings: UpstreamSettings) -> None:
        self._settings = settings

    @property
    def target_url(self) -> str:
        return self._settings.target_url

    async def open(self, headers: dict[str, str]) -> UpstreamLeg:
        """Complete the opening handshake with the target.

        Raises whatever ``websockets.connect`` raises (``OSError``,
        ``InvalidHandshake``, ``TimeoutError``) when the handshake fails.
        """
        options = {
            "additional_headers": list(headers.items()),
            "open_timeout": self._settings.open_timeout_s,
            "ping_interval": self._settings.ping_interval_s,
            "max_size": self._settings.max_message_bytes,
        }
        # A configured User-Agent replaces the library's default one.
        if any(name.lower() == "user-agent" for name in headers):
            options["user_agent_header"] = None
        conn = await websockets.connect(self._settings.target_url, **options)
        logger.debug("upstream handshake complete url=%s", self._settings.target_url)
        return UpstreamLeg(conn)


__all__ = ["UpstreamConnector"]
