"""RequestOrchestrator - balance request with a single re-auth retry"""

from enum import Enum
from typing import TYPE_CHECKING

from loguru import logger

from vipbalance.core.config import Config
from vipbalance.domain.models import BalanceResult
from vipbalance.infrastructure.api.protocols import BalanceGateway
from vipbalance.infrastructure.session import SessionManager

if TYPE_CHECKING:
    from loguru import Logger


class OrchestratorState(Enum):
    IDLE = "idle"
    FETCHED_ONCE = "fetched_once"
    SUCCESS = "success"
    RETRYING = "retrying"
    DONE = "done"


def is_stale_session(result: BalanceResult) -> bool:
    """Treat any non-200 balance answer as a possibly expired session

    The server answers 401 at first and 403 after about a day for the same
    expired session, so no specific code is relied upon.
    """
    return not result.is_success


class RequestOrchestrator:
    """Runs one balance request, re-authenticating and retrying at most once

    Idle -> FetchedOnce -> (Success | Retrying) -> Done
    """

    def __init__(
        self,
        config: Config,
        session_manager: SessionManager,
        balance_gateway: BalanceGateway,
        log: "Logger | None" = None,
    ) -> None:
        self._config = config
        self._session_manager = session_manager
        self._balance_gateway = balance_gateway
        self._log = log or logger.bind(component="orchestrator")
        self.state = OrchestratorState.IDLE

    def run(self) -> BalanceResult:
        """Fetch the balance, retrying once with a fresh session on failure

        Returns:
            The first successful result, or the result of the single retry
            whatever its status

        Raises:
            VipBalanceError: Any fatal error from session acquisition or
                the balance request
        """
        self.state = OrchestratorState.IDLE

        session = self._session_manager.acquire(force_refresh=False)
        result = self._balance_gateway.fetch_balance(self._config, session)
        self.state = OrchestratorState.FETCHED_ONCE

        if not is_stale_session(result):
            self.state = OrchestratorState.SUCCESS
            return result

        self.state = OrchestratorState.RETRYING
        self._log.info(
            f"Balance request returned {result.status_code}, "
            "re-authenticating and retrying once"
        )
        session = self._session_manager.acquire(force_refresh=True)
        result = self._balance_gateway.fetch_balance(self._config, session)
        self.state = OrchestratorState.DONE

        if not result.is_success:
            self._log.warning(
                f"Balance request failed after retry: {result.status_code}"
            )
        return result
