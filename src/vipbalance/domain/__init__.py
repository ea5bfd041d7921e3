"""Domain models for vip-balance"""

from .models import ApiError, AuthResult, BalanceResult, Contract, SessionInfo

__all__ = [
    "ApiError",
    "AuthResult",
    "BalanceResult",
    "Contract",
    "SessionInfo",
]
