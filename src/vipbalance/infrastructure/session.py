"""SessionManager - session acquisition from cache or server"""

from typing import TYPE_CHECKING

from loguru import logger

from vipbalance.core.config import Config
from vipbalance.domain.models import AuthResult, SessionInfo
from vipbalance.shared.constants import SUCCESS_STATUS
from vipbalance.shared.exceptions import (
    AuthenticationFailed,
    DecodeError,
    SessionCacheMiss,
    SessionPersistFailure,
)

from .api.contracts import resolve_contract
from .api.protocols import AuthGateway
from .session_store import SessionStore

if TYPE_CHECKING:
    from loguru import Logger


def auth_failure_message(result: AuthResult) -> str:
    """Last server message, or a generic one when the server sent none"""
    if result.errors:
        return result.errors[-1].message
    return f"authentication failed with status {result.status_code}"


class SessionManager:
    """Provides a usable session, authenticating only when needed

    Responsibilities:
    - Cache lookup via SessionStore
    - Login via AuthGateway on cache miss or forced refresh
    - Contract selection
    - Persisting the new session
    """

    def __init__(
        self,
        config: Config,
        auth_gateway: AuthGateway,
        store: SessionStore,
        log: "Logger | None" = None,
    ) -> None:
        self._config = config
        self._auth_gateway = auth_gateway
        self._store = store
        self._log = log or logger.bind(component="session")

    def acquire(self, force_refresh: bool = False) -> SessionInfo:
        """Return the cached session or log in for a new one

        Args:
            force_refresh: Skip the cache and authenticate unconditionally

        Returns:
            SessionInfo with both identifiers set

        Raises:
            AuthenticationFailed: If the server rejects the credentials
            ContractNotFound, EmptyContractList: If no contract can be chosen
            TransportError: If the auth request fails
            DecodeError: If the auth answer is malformed or incomplete
        """
        if not force_refresh:
            try:
                return self._store.load()
            except SessionCacheMiss as e:
                self._log.info(f"No cached session: {e}")

        session = self._session_from_server()

        try:
            self._store.save(session)
        except SessionPersistFailure as e:
            self._log.warning(f"Session not cached: {e}")

        return session

    def _session_from_server(self) -> SessionInfo:
        result = self._auth_gateway.authenticate(self._config)

        if result.status_code != SUCCESS_STATUS:
            message = auth_failure_message(result)
            self._log.error("Authentication failed")
            self._log.error(f"Code: {result.status_code}")
            raise AuthenticationFailed(result.status_code, message)

        self._log.info(f"Authenticated as {self._config.login}")

        contract_id = resolve_contract(
            result.contracts, self._config.contract_filter, log=self._log
        )
        try:
            return SessionInfo(
                session_id=result.session_id, contract_id=contract_id
            )
        except ValueError as e:
            raise DecodeError(f"Incomplete auth response: {e}") from e
