"""
Global pytest configuration and fixtures
"""
import pytest
from typing import Dict, Any

from utils.logger import reset_logger

pytest_plugins = ["tests.fixtures.ripestat_fixtures"]


@pytest.fixture
def test_config() -> Dict[str, Any]:
    """Provide test configuration"""
    return {
        "ripestat": {
            "base_url": "https://stat.ripe.net/data",
            "timeout_ms": 500,
            "retries": 0,
        },
        "check": {
            "upstreams": False,
        },
        "logging": {
            "level": "DEBUG",
        },
    }


@pytest.fixture(autouse=True)
def fresh_logger():
    """Every test starts with a logger built from its own config"""
    reset_logger()
    yield
    reset_logger()
