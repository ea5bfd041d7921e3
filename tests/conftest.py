"""Pytest fixtures for vip-balance tests"""

import json
from pathlib import Path

import pytest
from loguru import logger

from vipbalance.core.config import Config
from vipbalance.domain.models import AuthResult, BalanceResult, Contract

API_SITE = "https://api.example.test"

_FIXTURE_CACHE = {}


@pytest.fixture(scope="session")
def fixtures_dir():
    """Return path to test fixtures directory"""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def load_fixture(fixtures_dir):
    """Helper to load JSON fixture files with caching."""

    def _load(filename):
        path = fixtures_dir / "vip_responses" / filename
        if path not in _FIXTURE_CACHE:
            with open(path, encoding="utf-8") as f:
                _FIXTURE_CACHE[path] = json.load(f)
        return _FIXTURE_CACHE[path]

    return _load


@pytest.fixture
def config(tmp_path) -> Config:
    """Config pointing at a fake API with a temporary session file"""
    return Config(
        api_site=API_SITE,
        api_token="test-api-key",
        login="driver",
        password="secret",
        contract_filter="",
        timeout_seconds=5.0,
        session_file=str(tmp_path / "session.id"),
    )


@pytest.fixture
def session_path(config) -> Path:
    return Path(config.session_file)


@pytest.fixture
def auth_ok() -> AuthResult:
    return AuthResult(
        status_code=200,
        session_id="sess-new",
        contracts=(Contract(id="c1", number="AB-01"),),
    )


@pytest.fixture
def balance_ok() -> BalanceResult:
    return BalanceResult(status_code=200, balance="100.00")


@pytest.fixture
def balance_forbidden() -> BalanceResult:
    return BalanceResult(status_code=403)


@pytest.fixture
def captured_logs():
    """Collect formatted loguru messages emitted during a test"""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    yield messages
    logger.remove(handler_id)
