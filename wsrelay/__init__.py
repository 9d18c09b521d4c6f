"""WebSocket relay that dials a fixed upstream on behalf of browser clients."""

__version__ = "0.1.0"

__all__ = ["__version__"]
