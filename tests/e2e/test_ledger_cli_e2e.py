#!/usr/bin/env python3
"""
E2E Tests for the ledger-engine CLI

Runs the CLI module in a subprocess so stdout and stderr are observed
exactly as a shell would see them.
"""

import pytest

from tests.fixtures.e2e_helpers import run_cli
from tests.fixtures.feeds import parse_balance_table, write_feed


@pytest.mark.e2e
def test_full_dispute_lifecycle(temp_dir):
    """
    Test a feed exercising every transaction kind.

    Verifies:
    - Exit status 0 and nothing but the table on stdout
    - Chargeback leaves client 1 frozen
    - Resolve leaves client 2 unlocked
    - Unknown client rows don't appear
    """
    path = write_feed(
        temp_dir / "feed.csv",
        [
            "deposit, 1, 1, 10.0",
            "deposit, 2, 2, 4.5",
            "withdrawal, 1, 3, 2.25",
            "dispute, 1, 1,",
            "chargeback, 1, 1,",
            "deposit, 1, 4, 100.0",
            "dispute, 2, 2,",
            "resolve, 2, 2,",
            "withdrawal, 2, 5, 0.5",
            "withdrawal, 3, 6, 1.0",
        ],
    )

    result = run_cli(path)

    assert result.returncode == 0, result.stderr
    assert result.stderr == ""
    assert parse_balance_table(result.stdout) == {
        1: {"available": "-2.25", "held": "0.0", "total": "-2.25", "locked": "true"},
        2: {"available": "4.0", "held": "0.0", "total": "4.0", "locked": "false"},
    }


@pytest.mark.e2e
def test_rejections_go_to_stderr_only(temp_dir):
    path = write_feed(temp_dir / "feed.csv", ["withdrawal,1,1,5.0", "deposit,1,2,1.0"])

    result = run_cli("--report-rejections", path)

    assert result.returncode == 0
    assert "rejected: no account for client" in result.stderr
    assert result.stdout == "client,available,held,total,locked\n1,1.0,0.0,1.0,false\n"


@pytest.mark.e2e
def test_usage_error_exits_non_zero(temp_dir):
    result = run_cli()

    assert result.returncode != 0
    assert result.stdout == ""
    assert "Usage:" in result.stderr


@pytest.mark.e2e
def test_fatal_error_exits_non_zero(temp_dir):
    result = run_cli(temp_dir / "missing.csv")

    assert result.returncode == 1
    assert result.stdout == ""
    assert "Transaction feed not found" in result.stderr
