"""VipAuthGateway - credential-based authentication"""

from typing import TYPE_CHECKING

from loguru import logger

from vipbalance.core.config import Config
from vipbalance.domain.models import AuthResult
from vipbalance.shared.constants import AUTH_ENDPOINT
from vipbalance.shared.exceptions import ConfigurationError, DecodeError

from .requests import VipRequestClient

if TYPE_CHECKING:
    from loguru import Logger


class VipAuthGateway:
    """Performs login against the VIP API

    A non-200 status code in the answer is returned as data; only transport
    and decode failures raise.
    """

    def __init__(
        self, request_client: VipRequestClient, log: "Logger | None" = None
    ) -> None:
        self._request_client = request_client
        self._log = log or logger.bind(component="auth")

    def authenticate(self, config: Config) -> AuthResult:
        """Send credentials and decode the answer

        Args:
            config: Configuration holding api_token, login and password

        Returns:
            AuthResult with server status, session id and contracts

        Raises:
            ConfigurationError: If login or password is empty
            TransportError: If the request fails
            DecodeError: If the answer does not match the expected shape
        """
        if not config.login or not config.password:
            raise ConfigurationError("login and password must not be empty")

        self._log.info("Requesting session id from server")
        payload = self._request_client.post_form(
            AUTH_ENDPOINT,
            data={"login": config.login, "password": config.password},
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "api_key": config.api_token,
            },
        )

        try:
            result = AuthResult.from_payload(payload)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DecodeError(f"Malformed auth response: {e}") from e

        self._log.debug(
            f"Auth answer: code={result.status_code} "
            f"client_id={result.client_id} contracts={len(result.contracts)}"
        )
        return result
