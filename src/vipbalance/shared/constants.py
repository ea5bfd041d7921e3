"""Shared constants for the VIP API client"""

SUCCESS_STATUS = 200

AUTH_ENDPOINT = "/vip/v1/authUser"
BALANCE_ENDPOINT = "/vip/v1/getPartContractData"

DEFAULT_SESSION_FILE = "session.id"
DEFAULT_CONFIG_FILE = "config.yaml"
DEFAULT_TIMEOUT_SECONDS = 30.0
