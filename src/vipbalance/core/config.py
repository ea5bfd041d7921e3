"""Configuration management for the VIP balance client"""

import os
from dataclasses import dataclass
from pathlib import Path

import yaml
from dotenv import find_dotenv, load_dotenv
from loguru import logger

from vipbalance.shared.constants import (
    DEFAULT_SESSION_FILE,
    DEFAULT_TIMEOUT_SECONDS,
)
from vipbalance.shared.exceptions import ConfigurationError

# Environment variables take precedence over the YAML file
ENV_OVERRIDES = {
    "api_site": "VIP_API_SITE",
    "api_token": "VIP_API_TOKEN",
    "login": "VIP_LOGIN",
    "password": "VIP_PASSWORD",
    "contract": "VIP_CONTRACT",
}

REQUIRED_FIELDS = ("api_site", "api_token", "login", "password")


@dataclass(frozen=True)
class Config:
    """Configuration for the VIP API client loaded from YAML and environment"""

    api_site: str
    api_token: str
    login: str
    password: str

    # Empty filter selects the first contract returned by the server
    contract_filter: str = ""

    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    session_file: str = DEFAULT_SESSION_FILE

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        session_file: str | None = None,
        use_env: bool = True,
    ) -> "Config":
        """Load configuration from a YAML file with environment overrides

        Args:
            path: Path to the YAML configuration file
            session_file: Optional session cache path overriding the default
            use_env: If True, apply VIP_* environment variables (and .env)

        Returns:
            Config instance

        Raises:
            ConfigurationError: If the file cannot be read or parsed, or
                required fields are missing
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                # BaseLoader keeps every scalar as text, so 0123 stays "0123"
                raw = yaml.load(f, Loader=yaml.BaseLoader) or {}
        except OSError as e:
            raise ConfigurationError(
                f"Cannot open configuration file {path}: {e}"
            ) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Cannot parse configuration file {path}: {e}"
            ) from e

        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"Configuration file {path} must contain a mapping"
            )

        values = {str(k).lower(): v for k, v in raw.items()}

        if use_env:
            load_dotenv(find_dotenv(usecwd=True))
            for key, env_name in ENV_OVERRIDES.items():
                env_value = os.getenv(env_name)
                if env_value:
                    values[key] = env_value

        config = cls._from_mapping(values, session_file)
        logger.info(f"Configuration file {path} parsed successfully")
        logger.debug(f"  API site: {config.api_site}")
        logger.debug(f"  Login: {config.login}")
        logger.debug(
            f"  Contract filter: {config.contract_filter or '<first contract>'}"
        )
        logger.debug(f"  Session file: {config.session_file}")
        return config

    @classmethod
    def _from_mapping(
        cls, values: dict, session_file: str | None = None
    ) -> "Config":
        missing = [k for k in REQUIRED_FIELDS if not values.get(k)]
        if missing:
            raise ConfigurationError(f"Missing configuration: {missing}")

        try:
            timeout = float(
                values.get("timeout_seconds") or DEFAULT_TIMEOUT_SECONDS
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid timeout_seconds: {values.get('timeout_seconds')}"
            ) from e
        if timeout <= 0:
            raise ConfigurationError("timeout_seconds must be positive")

        return cls(
            api_site=str(values["api_site"]),
            api_token=str(values["api_token"]),
            login=str(values["login"]),
            password=str(values["password"]),
            contract_filter=str(values.get("contract") or ""),
            timeout_seconds=timeout,
            session_file=session_file
            or str(values.get("session_file") or DEFAULT_SESSION_FILE),
        )
