"""Infrastructure: VIP API gateways and session handling"""

from .session import SessionManager
from .session_store import SessionStore

__all__ = ["SessionManager", "SessionStore"]
