"""Interface for building the upstream handshake headers."""

from __future__ import annotations

from typing import Protocol


class HeaderStrategy(Protocol):
    """Builds the header set sent with every upstream handshake.

    Exactly one strategy is chosen per deployment.
    """

    name: str
    requires_credential: bool

    def build(self, credential: str | None) -> dict[str, str]: ...


__all__ = ["HeaderStrategy"]
