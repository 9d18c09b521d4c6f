"""Main FastAPI server for the WebSocket relay."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket
from fastapi.responses import ORJSONResponse
from fastapi.middleware.cors import CORSMiddleware

from wsrelay import __version__
from wsrelay.config.websocket import WS_ENDPOINT_PATH
from wsrelay.config.server import CORS_ALLOWED_ORIGINS
from wsrelay.runtime.logging import configure_logging
from wsrelay.runtime.dependencies import build_runtime_deps
from wsrelay.handlers.manager import handle_websocket_connection

logger = logging.getLogger(__name__)

configure_logging()


@asynccontextmanager
async def _lifespan(app: FastAPI):
    runtime_deps = await build_runtime_deps()
    app.state.runtime_deps = runtime_deps
    logger.info("runtime: ready, relaying on %s", WS_ENDPOINT_PATH)
    try:
        yield
    finally:
        deps = getattr(app.state, "runtime_deps", None)
        if deps is not None:
            await deps.shutdown()


app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(CORS_ALLOWED_ORIGINS),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


def _active_sessions() -> int:
    deps = getattr(app.state, "runtime_deps", None)
    if deps is None:
        return 0
    return deps.relay_bridge.active_sessions()


@app.get("/")
async def root() -> dict[str, str]:
    return {"status": "ok", "service": "wsrelay", "version": __version__}


@app.get("/health")
async def health() -> dict[str, str | int]:
    return {"status": "ok", "sessions": _active_sessions()}


@app.get("/healthz")
async def healthz() -> dict[str, str | int]:
    return {"status": "ok", "sessions": _active_sessions()}


@app.websocket(WS_ENDPOINT_PATH)
async def websocket_endpoint(websocket: WebSocket) -> None:
    runtime_deps = getattr(app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    await handle_websocket_connection(websocket, runtime_deps)


# Any other plain HTTP GET gets the service banner, so probes on arbitrary paths see a 200.
@app.get("/{path:path}", include_in_schema=False)
async def banner(path: str) -> dict[str, str]:
    return await root()
