"""Consolidated exceptions for the VIP balance client.

All custom exceptions are defined here to provide a single source of truth
for error handling across the application.
"""


class VipBalanceError(Exception):
    """Base exception for vip-balance errors"""

    pass


class ConfigurationError(VipBalanceError):
    """Raised when configuration is invalid or missing"""

    pass


class VipClientError(VipBalanceError):
    """Base exception for VIP API client errors"""

    pass


class TransportError(VipClientError):
    """Raised when an HTTP request to the VIP API cannot be completed"""

    pass


class DecodeError(VipClientError):
    """Raised when a VIP API response body is not the expected JSON"""

    pass


class OperationCancelled(VipClientError):
    """Raised when a request is attempted after cancellation was requested"""

    pass


class AuthenticationFailed(VipBalanceError):
    """Raised when the auth endpoint answers with a non-200 status code"""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"Authentication failed ({status_code}): {message}")
        self.status_code = status_code
        self.message = message


class ContractResolutionError(VipBalanceError):
    """Base contract selection error"""

    pass


class EmptyContractList(ContractResolutionError):
    """Raised when the server returned no contracts to choose from"""

    pass


class ContractNotFound(ContractResolutionError):
    """Raised when no contract number contains the configured filter"""

    def __init__(self, contract_filter: str) -> None:
        super().__init__(f"Contract {contract_filter} not found")
        self.contract_filter = contract_filter


class SessionStoreError(VipBalanceError):
    """Base session cache error"""

    pass


class SessionCacheMiss(SessionStoreError):
    """Raised when no usable session could be read from the cache file"""

    pass


class SessionPersistFailure(SessionStoreError):
    """Raised when the session cache file cannot be written"""

    pass
