"""Shared constants and exceptions for vip-balance."""

from .constants import (
    AUTH_ENDPOINT,
    BALANCE_ENDPOINT,
    SUCCESS_STATUS,
)

__all__ = ["AUTH_ENDPOINT", "BALANCE_ENDPOINT", "SUCCESS_STATUS"]
