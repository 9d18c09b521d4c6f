"""Environment parsing for runtime settings."""

from __future__ import annotations

import os
from urllib.parse import urlparse

from wsrelay.config.server import (
    ENV_HOST,
    ENV_PORT,
    ANY_ORIGIN,
    DEFAULT_HOST,
    DEFAULT_PORT,
    ENV_ALLOWED_ORIGINS,
    DEFAULT_ALLOWED_ORIGINS,
)
from wsrelay.state.settings import (
    AppSettings,
    LimitsSettings,
    ServerSettings,
    UpstreamSettings,
    WebSocketSettings,
)
from wsrelay.config.websocket import (
    ENV_WS_TOKEN_PARAM,
    DEFAULT_WS_TOKEN_PARAM,
)
from wsrelay.config.upstream import (
    HEADER_MODES,
    ENV_RELAY_TARGET_URL,
    ENV_RELAY_USER_AGENT,
    ENV_RELAY_HEADER_MODE,
    HEADER_MODE_IMPERSONATE,
    ENV_RELAY_OPEN_TIMEOUT_S,
    DEFAULT_RELAY_TARGET_URL,
    DEFAULT_RELAY_USER_AGENT,
    ENV_RELAY_PING_INTERVAL_S,
    ENV_RELAY_ORIGIN_OVERRIDE,
    DEFAULT_RELAY_HEADER_MODE,
    ENV_RELAY_MAX_MESSAGE_BYTES,
    DEFAULT_RELAY_OPEN_TIMEOUT_S,
    DEFAULT_RELAY_PING_INTERVAL_S,
    DEFAULT_RELAY_ORIGIN_OVERRIDE,
    DEFAULT_RELAY_MAX_MESSAGE_BYTES,
)
from wsrelay.config.limits import (
    OVERFLOW_POLICIES,
    ENV_RELAY_PENDING_OVERFLOW,
    ENV_RELAY_PENDING_MAX_BYTES,
    ENV_MAX_CONCURRENT_CONNECTIONS,
    ENV_RELAY_PENDING_MAX_MESSAGES,
    DEFAULT_RELAY_PENDING_OVERFLOW,
    DEFAULT_RELAY_PENDING_MAX_BYTES,
    DEFAULT_MAX_CONCURRENT_CONNECTIONS,
    DEFAULT_RELAY_PENDING_MAX_MESSAGES,
)

_DISABLED_VALUES = {"0", "none", "null", "disabled", "disable", "off"}


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _optional_float_env(name: str, default: float) -> float | None:
    """Positive float, or None when the value is disabled ("0", "off", ...)."""
    raw = (os.getenv(name) or "").strip()
    if raw.lower() in _DISABLED_VALUES:
        return None
    value = _float_env(name, default)
    return value if value > 0 else None


def _list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    items = tuple(part.strip() for part in raw.split(",") if part.strip())
    return items or default


def _validate_target_url(url: str) -> str:
    if not url:
        raise ValueError(f"{ENV_RELAY_TARGET_URL} must be set to the upstream ws:// or wss:// URL")
    parsed = urlparse(url)
    if parsed.scheme not in {"ws", "wss"} or not parsed.netloc:
        raise ValueError(f"{ENV_RELAY_TARGET_URL} must be a ws:// or wss:// URL, got {url!r}")
    return url


def _validate_choice(name: str, value: str, choices: frozenset[str]) -> str:
    normalized = value.strip().lower()
    if normalized not in choices:
        raise ValueError(f"{name} must be one of {sorted(choices)}, got {value!r}")
    return normalized


def _load_server_settings() -> ServerSettings:
    port = _int_env(ENV_PORT, DEFAULT_PORT)
    if port <= 0 or port > 65535:
        port = DEFAULT_PORT
    origins = _list_env(ENV_ALLOWED_ORIGINS, DEFAULT_ALLOWED_ORIGINS)
    if ANY_ORIGIN in origins:
        origins = (ANY_ORIGIN,)
    return ServerSettings(
        host=_str_env(ENV_HOST, DEFAULT_HOST),
        port=port,
        allowed_origins=origins,
    )


def _load_upstream_settings() -> UpstreamSettings:
    target_url = _validate_target_url(_str_env(ENV_RELAY_TARGET_URL, DEFAULT_RELAY_TARGET_URL))
    header_mode = _validate_choice(
        ENV_RELAY_HEADER_MODE,
        _str_env(ENV_RELAY_HEADER_MODE, DEFAULT_RELAY_HEADER_MODE),
        HEADER_MODES,
    )
    origin_override = _str_env(ENV_RELAY_ORIGIN_OVERRIDE, DEFAULT_RELAY_ORIGIN_OVERRIDE)
    if header_mode == HEADER_MODE_IMPERSONATE and not origin_override:
        raise ValueError(f"{ENV_RELAY_ORIGIN_OVERRIDE} is required when {ENV_RELAY_HEADER_MODE}={header_mode}")

    max_message_bytes: int | None = _int_env(ENV_RELAY_MAX_MESSAGE_BYTES, DEFAULT_RELAY_MAX_MESSAGE_BYTES)
    if max_message_bytes is not None and max_message_bytes <= 0:
        max_message_bytes = None

    return UpstreamSettings(
        target_url=target_url,
        header_mode=header_mode,
        user_agent=_str_env(ENV_RELAY_USER_AGENT, DEFAULT_RELAY_USER_AGENT),
        origin_override=origin_override,
        open_timeout_s=_optional_float_env(ENV_RELAY_OPEN_TIMEOUT_S, DEFAULT_RELAY_OPEN_TIMEOUT_S),
        ping_interval_s=_optional_float_env(ENV_RELAY_PING_INTERVAL_S, DEFAULT_RELAY_PING_INTERVAL_S),
        max_message_bytes=max_message_bytes,
    )


def _load_limits_settings() -> LimitsSettings:
    return LimitsSettings(
        max_concurrent_connections=max(1, _int_env(ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS)),
        pending_max_messages=max(0, _int_env(ENV_RELAY_PENDING_MAX_MESSAGES, DEFAULT_RELAY_PENDING_MAX_MESSAGES)),
        pending_max_bytes=max(0, _int_env(ENV_RELAY_PENDING_MAX_BYTES, DEFAULT_RELAY_PENDING_MAX_BYTES)),
        pending_overflow=_validate_choice(
            ENV_RELAY_PENDING_OVERFLOW,
            _str_env(ENV_RELAY_PENDING_OVERFLOW, DEFAULT_RELAY_PENDING_OVERFLOW),
            OVERFLOW_POLICIES,
        ),
    )


def _load_websocket_settings() -> WebSocketSettings:
    return WebSocketSettings(
        token_param=_str_env(ENV_WS_TOKEN_PARAM, DEFAULT_WS_TOKEN_PARAM),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        server=_load_server_settings(),
        upstream=_load_upstream_settings(),
        limits=_load_limits_settings(),
        websocket=_load_websocket_settings(),
    )


__all__ = ["load_settings"]
