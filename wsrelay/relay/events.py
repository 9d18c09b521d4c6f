"""Events delivered to a relay session's transition loop."""

from __future__ import annotations

from dataclasses import dataclass

from .pending import Payload
from .upstream_leg import UpstreamLeg


@dataclass(frozen=True, slots=True)
class ClientMessage:
    payload: Payload


@dataclass(frozen=True, slots=True)
class ClientClosed:
    code: int | None
    reason: str


@dataclass(frozen=True, slots=True)
class ClientFailed:
    error: BaseException


@dataclass(frozen=True, slots=True)
class UpstreamOpened:
    leg: UpstreamLeg


@dataclass(frozen=True, slots=True)
class UpstreamMessage:
    payload: Payload


@dataclass(frozen=True, slots=True)
class UpstreamClosed:
    code: int | None
    reason: str


@dataclass(frozen=True, slots=True)
class UpstreamFailed:
    error: BaseException


@dataclass(frozen=True, slots=True)
class SessionAborted:
    """Server-side decision to end the session (overflow, shutdown)."""

    code: int
    reason: str


RelayEvent = (
    ClientMessage
    | ClientClosed
    | ClientFailed
    | UpstreamOpened
    | UpstreamMessage
    | UpstreamClosed
    | UpstreamFailed
    | SessionAborted
)

__all__ = [
    "ClientClosed",
    "ClientFailed",
    "ClientMessage",
    "RelayEvent",
    "SessionAborted",
    "UpstreamClosed",
    "UpstreamFailed",
    "UpstreamMessage",
    "UpstreamOpened",
]
