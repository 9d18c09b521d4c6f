"""Present a fixed client identity to the upstream instead of a credential."""

from __future__ import annotations

from wsrelay.config.upstream import HEADER_MODE_IMPERSONATE


class ImpersonationHeaderStrategy:
    name = HEADER_MODE_IMPERSONATE
    requires_credential = False

    def __init__(self, *, user_agent: str, origin: str) -> None:
        if not origin:
            raise ValueError("impersonation header strategy requires an origin")
        self._headers = {"Origin": origin}
        if user_agent:
            self._headers["User-Agent"] = user_agent

    def build(self, credential: str | None) -> dict[str, str]:
        # The client credential is deliberately not forwarded in this mode.
        return dict(self._headers)


__all__ = ["ImpersonationHeaderStrategy"]
