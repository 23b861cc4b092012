#!/usr/bin/env python3
"""
Transaction Engine DataStores

In-memory stores owned by a TransactionProcessor for the length of one run.

- LedgerStore: accepted deposits and withdrawals keyed by transaction id
- AccountStore: one balance record per client id

Neither store supports deletion. Both are discarded once the final balance
snapshot has been taken.
"""

from collections.abc import Iterator

from .models import Account, LedgerEntry, LedgerError


class DuplicateTransactionError(LedgerError):
    """Raised when recording a transaction id that is already in the ledger."""

    pass


class LedgerStore:
    """
    Append-only history of accepted transactions.

    Entries are immutable apart from their dispute flags, which callers
    update through the entry returned by lookup_mut().
    """

    def __init__(self) -> None:
        self._entries: dict[int, LedgerEntry] = {}

    def contains(self, tx_id: int) -> bool:
        """Check if a transaction id is already in history."""
        return tx_id in self._entries

    def record(self, entry: LedgerEntry) -> None:
        """
        Insert a newly accepted transaction.

        Args:
            entry: Ledger entry for an accepted deposit or withdrawal

        Raises:
            DuplicateTransactionError: If the id is already recorded
        """
        if entry.tx_id in self._entries:
            raise DuplicateTransactionError(f"Transaction {entry.tx_id} already recorded")
        self._entries[entry.tx_id] = entry

    def lookup_mut(self, tx_id: int) -> LedgerEntry | None:
        """Get the live entry for a transaction id, or None if unknown."""
        return self._entries.get(tx_id)

    def __len__(self) -> int:
        return len(self._entries)

    def item_count(self) -> int:
        """Get count of accepted transactions."""
        return len(self._entries)

    def disputed_count(self) -> int:
        """Get count of entries with an open or charged-back dispute."""
        return sum(1 for entry in self._entries.values() if entry.disputed)

    def summary_text(self) -> str:
        """Get human-readable summary of ledger state."""
        return f"{self.item_count()} accepted transactions ({self.disputed_count()} disputed)"


class AccountStore:
    """
    Per-client balance records.

    A deposit is the only way an account comes into existence.
    """

    def __init__(self) -> None:
        self._accounts: dict[int, Account] = {}

    def contains(self, client_id: int) -> bool:
        """Check if the client has an account."""
        return client_id in self._accounts

    def lookup_mut(self, client_id: int) -> Account | None:
        """Get the live account for a client, or None if it doesn't exist."""
        return self._accounts.get(client_id)

    def create_or_get_for_deposit(self, client_id: int) -> Account:
        """
        Get the client's account, creating a zeroed one if needed.

        Only deposit handling may call this.

        Args:
            client_id: Client receiving the deposit

        Returns:
            Existing or newly created Account
        """
        account = self._accounts.get(client_id)
        if account is None:
            account = Account(client_id=client_id)
            self._accounts[client_id] = account
        return account

    def __iter__(self) -> Iterator[Account]:
        """Iterate over accounts ordered by client id."""
        for client_id in sorted(self._accounts):
            yield self._accounts[client_id]

    def __len__(self) -> int:
        return len(self._accounts)

    def snapshot(self) -> dict[int, Account]:
        """Get a mapping of client id to account."""
        return {account.client_id: account for account in self}

    def item_count(self) -> int:
        """Get count of client accounts."""
        return len(self._accounts)

    def summary_text(self) -> str:
        """Get human-readable summary of account state."""
        locked = sum(1 for account in self._accounts.values() if account.locked)
        return f"{self.item_count()} client accounts ({locked} locked)"
