"""FIFO buffer for client payloads that arrive before the upstream is open."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

from wsrelay.errors import PendingQueueFullError

Payload = str | bytes


def payload_size(payload: Payload) -> int:
    if isinstance(payload, bytes):
        return len(payload)
    return len(payload.encode("utf-8"))


class PendingQueue:
    """Ordered store of opaque payloads with optional bounds.

    A bound of 0 disables it. A rejected push leaves the queue unchanged.
    """

    def __init__(self, *, max_messages: int = 0, max_bytes: int = 0) -> None:
        self.max_messages = max(0, int(max_messages))
        self.max_bytes = max(0, int(max_bytes))
        self._items: deque[tuple[Payload, int]] = deque()
        self._bytes = 0

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    @property
    def queued_bytes(self) -> int:
        return self._bytes

    def push(self, payload: Payload) -> None:
        size = payload_size(payload)
        over_count = self.max_messages > 0 and len(self._items) + 1 > self.max_messages
        over_bytes = self.max_bytes > 0 and self._bytes + size > self.max_bytes
        if over_count or over_bytes:
            raise PendingQueueFullError(
                max_messages=self.max_messages,
                max_bytes=self.max_bytes,
                queued_messages=len(self._items),
                queued_bytes=self._bytes,
            )
        self._items.append((payload, size))
        self._bytes += size

    def popleft(self) -> Payload:
        payload, size = self._items.popleft()
        self._bytes = max(0, self._bytes - size)
        return payload

    def drain(self) -> Iterator[Payload]:
        """Yield and remove payloads oldest first.

        Items pushed while draining are yielded too.
        """
        while self._items:
            yield self.popleft()

    def clear(self) -> int:
        dropped = len(self._items)
        self._items.clear()
        self._bytes = 0
        return dropped


__all__ = ["Payload", "PendingQueue", "payload_size"]
