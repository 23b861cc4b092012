#!/usr/bin/env python3
"""
Unit tests for the in-memory LedgerStore and AccountStore.
"""

import pytest

from ledger.core.money import Money
from ledger.engine.datastore import AccountStore, DuplicateTransactionError, LedgerStore
from ledger.engine.models import LedgerEntry, TransactionKind


def _entry(tx_id: int, client_id: int = 1, amount: str = "1.0") -> LedgerEntry:
    return LedgerEntry(tx_id=tx_id, kind=TransactionKind.DEPOSIT, client_id=client_id, amount=Money.from_str(amount))


class TestLedgerStore:
    """Test LedgerStore behavior."""

    def setup_method(self):
        """Set up test fixtures."""
        self.store = LedgerStore()

    def test_record_and_lookup(self):
        entry = _entry(1)
        self.store.record(entry)

        assert self.store.contains(1)
        assert self.store.lookup_mut(1) is entry

    def test_lookup_unknown_returns_none(self):
        assert self.store.lookup_mut(42) is None
        assert not self.store.contains(42)

    def test_lookup_returns_live_entry(self):
        """Test flag updates through lookup_mut are visible on later lookups."""
        self.store.record(_entry(1))

        self.store.lookup_mut(1).disputed = True

        assert self.store.lookup_mut(1).disputed is True

    def test_duplicate_record_raises_and_keeps_original(self):
        original = _entry(1, amount="5")
        self.store.record(original)

        with pytest.raises(DuplicateTransactionError):
            self.store.record(_entry(1, amount="7"))

        assert self.store.lookup_mut(1) is original

    def test_counts_and_summary(self):
        self.store.record(_entry(1))
        self.store.record(_entry(2))
        self.store.lookup_mut(2).disputed = True

        assert len(self.store) == 2
        assert self.store.item_count() == 2
        assert self.store.disputed_count() == 1
        assert self.store.summary_text() == "2 accepted transactions (1 disputed)"


class TestAccountStore:
    """Test AccountStore behavior."""

    def setup_method(self):
        """Set up test fixtures."""
        self.store = AccountStore()

    def test_lookup_unknown_returns_none(self):
        assert self.store.lookup_mut(1) is None
        assert not self.store.contains(1)

    def test_create_or_get_creates_zeroed_account(self):
        account = self.store.create_or_get_for_deposit(3)

        assert account.client_id == 3
        assert account.total == Money.zero()
        assert account.lock_count == 0
        assert self.store.contains(3)

    def test_create_or_get_returns_existing(self):
        first = self.store.create_or_get_for_deposit(3)
        first.available = Money.from_str("10")

        second = self.store.create_or_get_for_deposit(3)

        assert second is first
        assert second.available == Money.from_str("10")
        assert len(self.store) == 1

    def test_iteration_ordered_by_client_id(self):
        for client_id in (5, 1, 3):
            self.store.create_or_get_for_deposit(client_id)

        assert [account.client_id for account in self.store] == [1, 3, 5]
        assert list(self.store.snapshot()) == [1, 3, 5]

    def test_summary_text(self):
        self.store.create_or_get_for_deposit(1)
        self.store.create_or_get_for_deposit(2).increment_locks()

        assert self.store.item_count() == 2
        assert self.store.summary_text() == "2 client accounts (1 locked)"
