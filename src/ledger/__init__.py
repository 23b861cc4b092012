"""
Client Ledger Engine - Transaction State Machine for Client Balances

Reads a sequential CSV feed of client transactions (deposits, withdrawals,
disputes, resolves and chargebacks) and produces each client's final
available, held and total balance.

Key Features:
- Exact Decimal arithmetic with 4-digit rounding only on output
- Dispute lifecycle with saturating per-account lock counting
- Permanent account freeze after a chargeback
- Silent per-transaction rejection with structured reasons for diagnostics

Domain Packages:
- core: Money, currency handling, configuration
- engine: Stores, processor, feed decoding and balance rendering
- cli: Command-line interface

Example Usage:
    from ledger.engine import process_file, render_accounts_csv

    accounts, summary = process_file("transactions.csv")
    print(render_accounts_csv(accounts.values()), end="")
"""

__version__ = "0.1.0"
__author__ = "Client Ledger Engine Developers"

# Export core utilities for easy access
from .core.config import Environment, get_config
from .core.currency import format_amount, parse_amount
from .core.money import Money

# Export key domain functionality
from .engine import (
    Account,
    AccountStore,
    LedgerStore,
    TransactionKind,
    TransactionProcessor,
    process_file,
    process_transactions,
)

__all__ = [
    # Core
    "Environment",
    "Money",
    "format_amount",
    "get_config",
    "parse_amount",
    # Engine
    "Account",
    "AccountStore",
    "LedgerStore",
    "TransactionKind",
    "TransactionProcessor",
    "process_file",
    "process_transactions",
]
