"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from wsrelay.relay.bridge import RelayBridge
    from wsrelay.state.settings import AppSettings


@dataclass(slots=True)
class RuntimeDeps:
    relay_bridge: RelayBridge
    settings: AppSettings

    async def shutdown(self) -> None:
        try:
            await self.relay_bridge.shutdown()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
