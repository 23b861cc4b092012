"""
Transaction Engine Package

Applies a feed of client transactions and produces final client balances.

This package provides:
- Typed transaction records with validated construction
- In-memory stores for accepted transactions and client accounts
- The transaction processor state machine (deposit, withdrawal, dispute,
  resolve, chargeback)
- CSV feed decoding and balance snapshot rendering

Key Components:
- models: Records, ledger entries, accounts and rejection reasons
- datastore: LedgerStore and AccountStore
- processor: TransactionProcessor and whole-feed helpers
- loader: CSV feed decoding
- report: CSV balance table rendering
"""

from .datastore import AccountStore, DuplicateTransactionError, LedgerStore
from .loader import FeedDecodeError, TransactionFeed, decode_row, load_transactions, read_feed
from .models import (
    MAX_LOCK_COUNT,
    Account,
    DisputeAction,
    EntryState,
    FundsTransaction,
    LedgerEntry,
    LedgerError,
    ProcessingSummary,
    Rejection,
    RejectionReason,
    TransactionKind,
    TransactionRecord,
    TransactionValidationError,
    build_record,
)
from .processor import TransactionProcessor, process_file, process_transactions
from .report import OUTPUT_COLUMNS, accounts_to_dataframe, render_accounts_csv, write_accounts_csv

__all__ = [
    # Domain models
    "Account",
    "DisputeAction",
    "EntryState",
    "FundsTransaction",
    "LedgerEntry",
    "MAX_LOCK_COUNT",
    "ProcessingSummary",
    "Rejection",
    "RejectionReason",
    "TransactionKind",
    "TransactionRecord",
    "build_record",
    # Errors
    "DuplicateTransactionError",
    "FeedDecodeError",
    "LedgerError",
    "TransactionValidationError",
    # Stores
    "AccountStore",
    "LedgerStore",
    # Processing
    "TransactionProcessor",
    "process_file",
    "process_transactions",
    # Feed I/O
    "OUTPUT_COLUMNS",
    "TransactionFeed",
    "accounts_to_dataframe",
    "decode_row",
    "load_transactions",
    "read_feed",
    "render_accounts_csv",
    "write_accounts_csv",
]
