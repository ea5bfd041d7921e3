"""Gateway protocols for the VIP API.

These protocols let the session manager and orchestrator run against test
doubles or alternative transports.
"""

from typing import Protocol, runtime_checkable

from vipbalance.core.config import Config
from vipbalance.domain.models import AuthResult, BalanceResult, SessionInfo


@runtime_checkable
class AuthGateway(Protocol):
    """Protocol for credential-based authentication."""

    def authenticate(self, config: Config) -> AuthResult:
        """Log in and return the decoded answer."""
        ...


@runtime_checkable
class BalanceGateway(Protocol):
    """Protocol for balance retrieval."""

    def fetch_balance(
        self, config: Config, session: SessionInfo
    ) -> BalanceResult:
        """Fetch balance data for the session's contract."""
        ...
