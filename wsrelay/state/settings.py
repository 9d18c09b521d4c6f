"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ServerSettings:
    host: str
    port: int
    allowed_origins: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class UpstreamSettings:
    target_url: str
    header_mode: str
    user_agent: str
    origin_override: str
    open_timeout_s: float | None
    ping_interval_s: float | None
    max_message_bytes: int | None


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_connections: int
    pending_max_messages: int
    pending_max_bytes: int
    pending_overflow: str


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    token_param: str


@dataclass(frozen=True, slots=True)
class AppSettings:
    server: ServerSettings
    upstream: UpstreamSettings
    limits: LimitsSettings
    websocket: WebSocketSettings


__all__ = [
    "AppSettings",
    "LimitsSettings",
    "ServerSettings",
    "UpstreamSettings",
    "WebSocketSettings",
]
