#!/usr/bin/env python3
"""
Transaction Processor

Applies decoded transaction records, strictly in feed order, against a
LedgerStore and an AccountStore.

Each record is either applied in full or rejected with no observable
change to history or balances. Rejections never stop the run; they are
logged at DEBUG with a structured reason and forwarded to an optional
callback.

Dispute lifecycle of an accepted deposit or withdrawal:
- accepted -> disputed (dispute): funds move from available to held and
  the account gains a lock
- disputed -> accepted (resolve): funds return to available and the lock
  is released
- disputed -> charged back (chargeback): held funds leave the account; the
  lock is never released, so the account stays frozen for the rest of the run
"""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from .datastore import AccountStore, LedgerStore
from .loader import TransactionFeed
from .models import (
    Account,
    DisputeAction,
    FundsTransaction,
    LedgerEntry,
    ProcessingSummary,
    Rejection,
    RejectionReason,
    TransactionKind,
    TransactionRecord,
    TransactionValidationError,
)

logger = logging.getLogger(__name__)

RejectionCallback = Callable[[Rejection], None]


class _Rejected(Exception):
    """Internal signal that a precondition failed before any state changed."""

    def __init__(self, reason: RejectionReason, detail: str = ""):
        super().__init__(reason.value)
        self.reason = reason
        self.detail = detail


class TransactionProcessor:
    """
    Transaction state machine over explicitly owned stores.

    Example:
        >>> processor = TransactionProcessor(LedgerStore(), AccountStore())
        >>> summary = processor.process(records)
        >>> for account in processor.accounts:
        ...     print(account.client_id, account.available)
    """

    def __init__(
        self,
        ledger: LedgerStore,
        accounts: AccountStore,
        on_reject: RejectionCallback | None = None,
    ):
        self.ledger = ledger
        self._accounts = accounts
        self.on_reject = on_reject
        self.summary = ProcessingSummary()

        self._handlers: dict[TransactionKind, Callable[..., None]] = {
            TransactionKind.DEPOSIT: self._deposit,
            TransactionKind.WITHDRAWAL: self._withdraw,
            TransactionKind.DISPUTE: self._dispute,
            TransactionKind.RESOLVE: self._resolve,
            TransactionKind.CHARGEBACK: self._chargeback,
        }

    @property
    def accounts(self) -> AccountStore:
        """Client balances accumulated so far."""
        return self._accounts

    def apply(self, record: TransactionRecord) -> bool:
        """
        Apply a single transaction record.

        Args:
            record: Validated deposit/withdrawal or dispute action

        Returns:
            True if applied, False if rejected
        """
        handler = self._handlers[record.kind]
        try:
            handler(record)
        except _Rejected as rejected:
            self._report(Rejection.from_record(record, rejected.reason, rejected.detail))
            return False

        self.summary.record_applied(record.kind)
        logger.debug("Applied %s tx %d for client %d", record.kind.value, record.tx_id, record.client_id)
        return True

    def reject_invalid(self, error: TransactionValidationError) -> None:
        """Report a row that failed validation before reaching the processor."""
        self._report(error.to_rejection())

    def process(self, records: Iterable[TransactionRecord]) -> ProcessingSummary:
        """
        Apply every record in order.

        Args:
            records: Records in feed order

        Returns:
            Summary of applied and rejected records
        """
        for record in records:
            self.apply(record)

        logger.info(
            "Processed %d transactions: %d applied, %d rejected",
            self.summary.total_processed,
            self.summary.applied,
            self.summary.rejected,
        )
        logger.info("Ledger: %s; accounts: %s", self.ledger.summary_text(), self._accounts.summary_text())
        return self.summary

    def _report(self, rejection: Rejection) -> None:
        self.summary.record_rejection(rejection)
        logger.debug("%s", rejection)
        if self.on_reject is not None:
            self.on_reject(rejection)

    # Funds transactions

    def _deposit(self, tx: FundsTransaction) -> None:
        if self.ledger.contains(tx.tx_id):
            raise _Rejected(RejectionReason.DUPLICATE_TRANSACTION)

        existing = self._accounts.lookup_mut(tx.client_id)
        if existing is not None and existing.locked:
            raise _Rejected(RejectionReason.ACCOUNT_FROZEN)

        account = self._accounts.create_or_get_for_deposit(tx.client_id)
        account.available = account.available + tx.amount
        account.total = account.total + tx.amount
        self.ledger.record(LedgerEntry.from_transaction(tx))

    def _withdraw(self, tx: FundsTransaction) -> None:
        if self.ledger.contains(tx.tx_id):
            raise _Rejected(RejectionReason.DUPLICATE_TRANSACTION)

        account = self._accounts.lookup_mut(tx.client_id)
        if account is None:
            raise _Rejected(RejectionReason.UNKNOWN_ACCOUNT)
        if account.locked:
            raise _Rejected(RejectionReason.ACCOUNT_FROZEN)
        # A disputed withdrawal can leave available below zero
        if account.available.is_negative():
            raise _Rejected(RejectionReason.NEGATIVE_AVAILABLE, detail=str(account.available))
        if account.available < tx.amount:
            raise _Rejected(
                RejectionReason.INSUFFICIENT_FUNDS,
                detail=f"requested {tx.amount}, available {account.available}",
            )

        account.available = account.available - tx.amount
        account.total = account.total - tx.amount
        self.ledger.record(LedgerEntry.from_transaction(tx))

    # Dispute actions

    def _referenced(self, action: DisputeAction, *, disputed: bool) -> tuple[LedgerEntry, Account]:
        """
        Look up the entry and account a dispute action refers to.

        Args:
            action: Dispute, resolve or chargeback
            disputed: Required current dispute flag of the referenced entry

        Returns:
            (entry, account) tuple

        Raises:
            _Rejected: If any precondition fails
        """
        entry = self.ledger.lookup_mut(action.tx_id)
        if entry is None:
            raise _Rejected(RejectionReason.UNKNOWN_TRANSACTION)
        if entry.charged_back:
            raise _Rejected(RejectionReason.ALREADY_CHARGED_BACK)
        if entry.disputed != disputed:
            raise _Rejected(RejectionReason.ALREADY_DISPUTED if entry.disputed else RejectionReason.NOT_DISPUTED)
        if entry.client_id != action.client_id:
            raise _Rejected(RejectionReason.CLIENT_MISMATCH, detail=f"owned by client {entry.client_id}")

        account = self._accounts.lookup_mut(action.client_id)
        if account is None:
            raise _Rejected(RejectionReason.UNKNOWN_ACCOUNT)

        return entry, account

    def _dispute(self, action: DisputeAction) -> None:
        entry, account = self._referenced(action, disputed=False)

        entry.disputed = True
        account.available = account.available - entry.amount
        account.held = account.held + entry.amount
        account.increment_locks()

    def _resolve(self, action: DisputeAction) -> None:
        entry, account = self._referenced(action, disputed=True)

        entry.disputed = False
        account.available = account.available + entry.amount
        account.held = account.held - entry.amount
        account.decrement_locks()

    def _chargeback(self, action: DisputeAction) -> None:
        entry, account = self._referenced(action, disputed=True)

        # The entry stays disputed and the lock is kept: the account is frozen for good
        entry.charged_back = True
        account.held = account.held - entry.amount
        account.total = account.total - entry.amount


def process_transactions(
    records: Iterable[TransactionRecord], on_reject: RejectionCallback | None = None
) -> tuple[dict[int, Account], ProcessingSummary]:
    """
    Run a full feed of records through fresh stores.

    Args:
        records: Records in feed order
        on_reject: Optional callback for each rejected record

    Returns:
        Tuple of (client id -> final Account, processing summary)
    """
    processor = TransactionProcessor(LedgerStore(), AccountStore(), on_reject=on_reject)
    summary = processor.process(records)
    return processor.accounts.snapshot(), summary


def process_file(
    path: str | Path, on_reject: RejectionCallback | None = None
) -> tuple[dict[int, Account], ProcessingSummary]:
    """
    Decode a CSV transaction feed and run it through fresh stores.

    Rows rejected at decode time for a missing or non-positive amount are
    reported through `on_reject` alongside processor rejections.

    Args:
        path: Path to the CSV feed
        on_reject: Optional callback for each rejected record

    Returns:
        Tuple of (client id -> final Account, processing summary)

    Raises:
        FeedDecodeError: If the feed cannot be read or a row cannot be decoded
    """
    processor = TransactionProcessor(LedgerStore(), AccountStore(), on_reject=on_reject)
    feed = TransactionFeed(path, on_invalid=processor.reject_invalid)
    summary = processor.process(feed)
    summary.skipped_unknown = feed.skipped_unknown
    return processor.accounts.snapshot(), summary
