"""Shared error types for the relay."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PendingQueueFullError(Exception):
    """Raised when a payload would push the pending queue past its bound."""

    max_messages: int
    max_bytes: int
    queued_messages: int
    queued_bytes: int


__all__ = ["PendingQueueFullError"]
