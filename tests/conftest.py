"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path

import pytest

from ledger.core import config as config_module
from tests.fixtures.feeds import write_feed


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def feed_file(temp_dir):
    """Factory writing a CSV transaction feed and returning its path."""

    def _write(rows, name="transactions.csv", header="type,client,tx,amount"):
        return write_feed(temp_dir / name, rows, header=header)

    return _write


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("LEDGER_ENV", "test")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.delenv("LEDGER_DISPLAY_PRECISION", raising=False)
    monkeypatch.delenv("LEDGER_REPORT_REJECTIONS", raising=False)

    # Drop any configuration cached by a previous test
    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for complete workflows"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests running the installed CLI"
    )
    config.addinivalue_line(
        "markers", "currency: Tests for currency handling and precision"
    )
    config.addinivalue_line(
        "markers", "disputes: Tests for the dispute, resolve and chargeback lifecycle"
    )
