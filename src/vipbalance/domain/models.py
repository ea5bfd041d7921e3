"""Domain models for the VIP balance client"""

from dataclasses import dataclass
from typing import Any

from vipbalance.shared.constants import SUCCESS_STATUS


@dataclass(frozen=True)
class Contract:
    """Billing contract as returned by the auth endpoint"""

    id: str
    number: str


@dataclass(frozen=True)
class SessionInfo:
    """Server-issued session paired with the selected contract

    Raises:
        ValueError: If either identifier is empty
    """

    session_id: str
    contract_id: str

    def __post_init__(self) -> None:
        if not self.session_id:
            raise ValueError("session_id must not be empty")
        if not self.contract_id:
            raise ValueError("contract_id must not be empty")


@dataclass(frozen=True)
class ApiError:
    """Single entry of the `status.errors` list"""

    type: str
    message: str


def _parse_status(payload: dict[str, Any]) -> tuple[int, tuple[ApiError, ...]]:
    """Extract status code and errors from a response envelope.

    Raises:
        KeyError, TypeError, ValueError: If the envelope is malformed
    """
    status = payload["status"]
    code = int(status["code"])
    errors = tuple(
        ApiError(type=str(e.get("type", "")), message=str(e.get("message", "")))
        for e in status.get("errors") or []
    )
    return code, errors


def _parse_contract(raw: dict[str, Any]) -> Contract:
    contract_id = raw["id"]
    if contract_id is None or contract_id == "":
        raise ValueError("contract id is missing")
    return Contract(id=str(contract_id), number=str(raw.get("number") or ""))


@dataclass(frozen=True)
class AuthResult:
    """Decoded answer of the auth endpoint"""

    status_code: int
    errors: tuple[ApiError, ...] = ()
    session_id: str = ""
    contracts: tuple[Contract, ...] = ()
    client_id: str = ""

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "AuthResult":
        """Build from the decoded JSON body.

        `data` may be absent or null on failed logins.

        Raises:
            KeyError, TypeError, ValueError: If the body does not match
                the expected shape
        """
        code, errors = _parse_status(payload)
        data = payload.get("data") or {}
        contracts = tuple(
            _parse_contract(c) for c in data.get("contracts") or []
        )
        return cls(
            status_code=code,
            errors=errors,
            session_id=str(data.get("session_id") or ""),
            contracts=contracts,
            client_id=str(data.get("client_id") or ""),
        )


@dataclass(frozen=True)
class BalanceResult:
    """Decoded answer of the contract data endpoint"""

    status_code: int
    errors: tuple[ApiError, ...] = ()
    balance: str = ""

    @property
    def is_success(self) -> bool:
        return self.status_code == SUCCESS_STATUS

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "BalanceResult":
        """Build from the decoded JSON body.

        Raises:
            KeyError, TypeError, ValueError: If the body does not match
                the expected shape
        """
        code, errors = _parse_status(payload)
        data = payload.get("data") or {}
        balance_data = data.get("balance_data") or {}
        balance = balance_data.get("balance")
        return cls(
            status_code=code,
            errors=errors,
            balance="" if balance is None else str(balance),
        )
