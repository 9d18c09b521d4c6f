"""Run the relay with uvicorn: ``python -m wsrelay``."""

from __future__ import annotations

import uvicorn

from wsrelay.config.logging import LOG_LEVEL
from wsrelay.runtime.settings_loader import load_settings


def main() -> int:
    # Fails fast on a bad configuration before uvicorn binds the port.
    server = load_settings().server
    uvicorn.run("wsrelay.server:app", host=server.host, port=server.port, log_level=LOG_LEVEL.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
