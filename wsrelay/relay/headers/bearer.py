"""Forward the client's credential as a bearer token."""

from __future__ import annotations

from wsrelay.config.upstream import HEADER_MODE_BEARER


class BearerHeaderStrategy:
    name = HEADER_MODE_BEARER
    requires_credential = True

    def __init__(self, *, user_agent: str) -> None:
        self._user_agent = user_agent

    def build(self, credential: str | None) -> dict[str, str]:
        token = (credential or "").strip()
        if not token:
            raise ValueError("bearer header strategy requires a credential")
        headers = {"Authorization": f"Bearer {token}"}
        if self._user_agent:
            headers["User-Agent"] = self._user_agent
        return headers


__all__ = ["BearerHeaderStrategy"]
