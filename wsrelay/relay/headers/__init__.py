from wsrelay.state.settings import UpstreamSettings
from wsrelay.config.upstream import HEADER_MODE_BEARER, HEADER_MODE_IMPERSONATE

from .base import HeaderStrategy
from .bearer import BearerHeaderStrategy
from .impersonate import ImpersonationHeaderStrategy


def build_header_strategy(settings: UpstreamSettings) -> HeaderStrategy:
    if settings.header_mode == HEADER_MODE_BEARER:
        return BearerHeaderStrategy(user_agent=settings.user_agent)
    if settings.header_mode == HEADER_MODE_IMPERSONATE:
        return ImpersonationHeaderStrategy(user_agent=settings.user_agent, origin=settings.origin_override)
    raise ValueError(f"unknown header mode: {settings.header_mode!r}")


__all__ = [
    "BearerHeaderStrategy",
    "HeaderStrategy",
    "ImpersonationHeaderStrategy",
    "build_header_strategy",
]
