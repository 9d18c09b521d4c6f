from .runtime import RuntimeDeps
from .settings import AppSettings
from .session import SessionPhase

__all__ = ["AppSettings", "RuntimeDeps", "SessionPhase"]
