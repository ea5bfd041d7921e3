"""VipBalanceGateway - contract balance lookup"""

from typing import TYPE_CHECKING

from loguru import logger

from vipbalance.core.config import Config
from vipbalance.domain.models import BalanceResult, SessionInfo
from vipbalance.shared.constants import BALANCE_ENDPOINT
from vipbalance.shared.exceptions import DecodeError

from .requests import VipRequestClient

if TYPE_CHECKING:
    from loguru import Logger


class VipBalanceGateway:
    """Fetches contract data for an established session"""

    def __init__(
        self, request_client: VipRequestClient, log: "Logger | None" = None
    ) -> None:
        self._request_client = request_client
        self._log = log or logger.bind(component="balance")

    def fetch_balance(
        self, config: Config, session: SessionInfo
    ) -> BalanceResult:
        """Request contract data for session.contract_id

        Returns:
            BalanceResult, possibly with a non-200 status code

        Raises:
            TransportError: If the request fails
            DecodeError: If the answer does not match the expected shape
        """
        self._log.info(
            f"Requesting contract data for contract id = {session.contract_id}"
        )
        payload = self._request_client.get(
            BALANCE_ENDPOINT,
            params={"contract_id": session.contract_id},
            headers={
                "api_key": config.api_token,
                "session_id": session.session_id,
            },
        )

        try:
            result = BalanceResult.from_payload(payload)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DecodeError(f"Malformed contract data response: {e}") from e

        self._log.info(f"Response code: {result.status_code}")
        for error in result.errors:
            self._log.info(f"Server message: {error.message}")
        return result
