"""VIP API infrastructure module

VipRequestClient - HTTP transport with timeout and typed errors
VipAuthGateway - Login and contract list retrieval
VipBalanceGateway - Contract balance lookup
resolve_contract - Contract selection by number filter
"""

from .auth import VipAuthGateway
from .balance import VipBalanceGateway
from .contracts import resolve_contract
from .protocols import AuthGateway, BalanceGateway
from .requests import VipRequestClient

__all__ = [
    "AuthGateway",
    "BalanceGateway",
    "VipAuthGateway",
    "VipBalanceGateway",
    "VipRequestClient",
    "resolve_contract",
]
