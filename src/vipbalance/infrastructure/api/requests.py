"""VipRequestClient - HTTP transport for the VIP API"""

import re
import threading
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit, urlunsplit

import requests
from loguru import logger

from vipbalance.shared.exceptions import (
    DecodeError,
    OperationCancelled,
    TransportError,
)

if TYPE_CHECKING:
    from loguru import Logger

SENSITIVE_HEADERS = {"api_key", "session_id"}
SENSITIVE_FIELDS = {"password"}

_SESSION_ID_RE = re.compile(r'("session_id"\s*:\s*)"[^"]*"')


def mask_body(text: str) -> str:
    """Hide session ids in a logged JSON body"""
    return _SESSION_ID_RE.sub(r'\1"***"', text)


def build_url(api_site: str, endpoint: str) -> str:
    """Replace the path of api_site with endpoint, keeping scheme and host

    Raises:
        TransportError: If api_site is not an absolute URL
    """
    parts = urlsplit(api_site)
    if not parts.scheme or not parts.netloc:
        raise TransportError(f"Invalid API site URL: {api_site!r}")
    return urlunsplit((parts.scheme, parts.netloc, endpoint, "", ""))


class VipRequestClient:
    """Low-level HTTP request client

    Responsibilities:
    - HTTP request execution with a per-call timeout
    - JSON decoding of response bodies
    - Mapping transport and decode failures to typed errors
    - Cooperative cancellation before any I/O

    Non-200 HTTP codes are not errors here: the VIP API reports its own
    status inside the JSON body and callers inspect that.
    """

    USER_AGENT = "vip-balance/0.1"

    def __init__(
        self,
        api_site: str,
        timeout: float,
        session: requests.Session | None = None,
        cancel_event: threading.Event | None = None,
        log: "Logger | None" = None,
    ) -> None:
        """Initialize request client

        Args:
            api_site: Base URL of the API, path is ignored
            timeout: Timeout in seconds applied to every request
            session: Optional requests.Session (for testing or reuse)
            cancel_event: When set, further requests raise OperationCancelled
            log: Logger instance, defaults to a bound loguru logger
        """
        self._api_site = api_site
        self._timeout = timeout
        self._cancel_event = cancel_event or threading.Event()
        self._log = log or logger.bind(component="requests")
        self._session = session or self._build_session()

    def _build_session(self) -> requests.Session:
        """Create a Session with request/response logging hooks."""
        session = requests.Session()
        session.headers["User-Agent"] = self.USER_AGENT
        session.hooks["response"].append(self._log_response)
        return session

    def _log_response(
        self, response: requests.Response, *args: Any, **kwargs: Any
    ) -> None:
        """Log responses with sensitive headers masked."""
        request = response.request
        headers = {
            k: ("***" if k.lower() in SENSITIVE_HEADERS else v)
            for k, v in request.headers.items()
        }
        self._log.debug(
            f"HTTP {request.method} {request.url} {headers} -> "
            f"status={response.status_code} body={mask_body(response.text)}"
        )

    @property
    def cancel_event(self) -> threading.Event:
        return self._cancel_event

    def cancel(self) -> None:
        """Request cancellation of any further calls"""
        self._cancel_event.set()

    def close(self) -> None:
        self._session.close()

    def post_form(
        self,
        endpoint: str,
        data: dict[str, str],
        headers: dict[str, str] | None = None,
    ) -> dict:
        """POST a form-encoded body and return the decoded JSON object

        Raises:
            TransportError: If the request cannot be completed
            DecodeError: If the body is not a JSON object
            OperationCancelled: If cancellation was requested
        """
        masked = {
            k: ("***" if k in SENSITIVE_FIELDS else v) for k, v in data.items()
        }
        self._log.debug(f"POST {endpoint} form={masked}")
        return self._send("POST", endpoint, headers=headers, data=data)

    def get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict:
        """GET with query parameters and return the decoded JSON object

        Raises:
            TransportError: If the request cannot be completed
            DecodeError: If the body is not a JSON object
            OperationCancelled: If cancellation was requested
        """
        self._log.debug(f"GET {endpoint} params={params}")
        return self._send("GET", endpoint, headers=headers, params=params)

    def _send(
        self,
        method: str,
        endpoint: str,
        headers: dict[str, str] | None = None,
        data: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ) -> dict:
        if self._cancel_event.is_set():
            raise OperationCancelled(f"{method} {endpoint} cancelled")

        url = build_url(self._api_site, endpoint)
        try:
            response = self._session.request(
                method,
                url,
                headers=headers,
                data=data,
                params=params,
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(
                f"{method} {endpoint} timed out after {self._timeout}s"
            ) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{method} {endpoint} failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise DecodeError(
                f"Cannot decode {endpoint} response "
                f"({response.status_code}): {response.text[:200]}"
            ) from e

        if not isinstance(body, dict):
            raise DecodeError(
                f"Unexpected {endpoint} response type: {type(body).__name__}"
            )
        return body
