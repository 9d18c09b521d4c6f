"""Relay session phases."""

from __future__ import annotations

from enum import Enum


class SessionPhase(str, Enum):
    INIT = "init"
    CONNECTING_UPSTREAM = "connecting_upstream"
    RELAYING = "relaying"
    CLOSING = "closing"
    CLOSED = "closed"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionPhase.CLOSING, SessionPhase.CLOSED, SessionPhase.REJECTED)


__all__ = ["SessionPhase"]
