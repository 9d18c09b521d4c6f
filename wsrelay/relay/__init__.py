from .bridge import RelayBridge
from .session import RelaySession
from .upstream import UpstreamConnector
from .headers import HeaderStrategy, build_header_strategy

__all__ = [
    "HeaderStrategy",
    "RelayBridge",
    "RelaySession",
    "UpstreamConnector",
    "build_header_strategy",
]
