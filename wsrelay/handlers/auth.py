"""Credential extraction for incoming relay connections."""

from __future__ import annotations

from fastapi import WebSocket


def get_credential(ws: WebSocket, param: str) -> str | None:
    # Browsers cannot set headers on a WebSocket, so the query string is the only channel.
    token = (ws.query_params.get(param) or "").strip()
    return token or None


__all__ = ["get_credential"]
