#!/usr/bin/env python3
"""
Transaction Engine Domain Models

Typed records for the transaction feed, the accepted-transaction ledger and
per-client balances.

The feed carries five kinds of transaction. Deposits and withdrawals move
funds and always carry a positive amount. Disputes, resolves and chargebacks
reference an earlier deposit or withdrawal by its transaction id and never
carry an amount of their own.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from ..core.currency import validate_balance
from ..core.money import Money

# Largest number of simultaneously open disputes an account can track
MAX_LOCK_COUNT = 65535


class LedgerError(Exception):
    """Base class for transaction engine errors."""

    pass


class TransactionKind(Enum):
    """Types of feed transactions."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @classmethod
    def parse(cls, value: str) -> "TransactionKind | None":
        """
        Look up a kind by its feed name.

        Returns:
            Matching kind, or None for unrecognized text
        """
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def moves_funds(self) -> bool:
        """Deposits and withdrawals carry an amount and create ledger history."""
        return self in (TransactionKind.DEPOSIT, TransactionKind.WITHDRAWAL)


class RejectionReason(Enum):
    """Why a single transaction was discarded."""

    DUPLICATE_TRANSACTION = "duplicate transaction id"
    MISSING_AMOUNT = "missing amount"
    NON_POSITIVE_AMOUNT = "amount is zero or negative"
    UNKNOWN_ACCOUNT = "no account for client"
    ACCOUNT_FROZEN = "account is frozen"
    NEGATIVE_AVAILABLE = "available balance is negative"
    INSUFFICIENT_FUNDS = "insufficient available funds"
    UNKNOWN_TRANSACTION = "referenced transaction not found"
    ALREADY_DISPUTED = "transaction already disputed"
    NOT_DISPUTED = "transaction is not disputed"
    CLIENT_MISMATCH = "transaction belongs to another client"
    ALREADY_CHARGED_BACK = "transaction already charged back"


class EntryState(Enum):
    """Dispute lifecycle of an accepted deposit or withdrawal."""

    ACCEPTED = "accepted"
    DISPUTED = "disputed"
    CHARGED_BACK = "charged_back"


@dataclass(frozen=True)
class FundsTransaction:
    """A deposit or withdrawal with its validated, strictly positive amount."""

    kind: TransactionKind
    client_id: int
    tx_id: int
    amount: Money

    def __post_init__(self) -> None:
        if not self.kind.moves_funds:
            raise ValueError(f"{self.kind.value} does not carry an amount")


@dataclass(frozen=True)
class DisputeAction:
    """A dispute, resolve or chargeback referencing an earlier transaction by `tx_id`."""

    kind: TransactionKind
    client_id: int
    tx_id: int

    def __post_init__(self) -> None:
        if self.kind.moves_funds:
            raise ValueError(f"{self.kind.value} requires an amount")


TransactionRecord = Union[FundsTransaction, DisputeAction]


class TransactionValidationError(LedgerError):
    """Raised when a decoded row cannot form a valid transaction record."""

    def __init__(
        self,
        reason: RejectionReason,
        kind: TransactionKind,
        client_id: int,
        tx_id: int,
        detail: str = "",
    ):
        self.reason = reason
        self.kind = kind
        self.client_id = client_id
        self.tx_id = tx_id
        self.detail = detail
        super().__init__(f"{kind.value} tx {tx_id} for client {client_id}: {reason.value}")

    def to_rejection(self) -> "Rejection":
        """Convert to a rejection report entry."""
        return Rejection(
            kind=self.kind,
            client_id=self.client_id,
            tx_id=self.tx_id,
            reason=self.reason,
            detail=self.detail,
        )


def build_record(
    kind: TransactionKind, client_id: int, tx_id: int, amount: Money | None = None
) -> TransactionRecord:
    """
    Construct a validated transaction record.

    Deposits and withdrawals must carry a strictly positive amount. Any
    amount given for a dispute, resolve or chargeback is ignored, since
    those act on the amount of the transaction they reference.

    Args:
        kind: Transaction kind
        client_id: Owning client
        tx_id: Transaction id (or referenced id for dispute actions)
        amount: Amount from the feed, if any

    Returns:
        FundsTransaction or DisputeAction

    Raises:
        TransactionValidationError: If a deposit/withdrawal amount is missing or not positive
    """
    if not kind.moves_funds:
        return DisputeAction(kind=kind, client_id=client_id, tx_id=tx_id)

    if amount is None:
        raise TransactionValidationError(RejectionReason.MISSING_AMOUNT, kind, client_id, tx_id)
    if not amount.is_positive():
        raise TransactionValidationError(
            RejectionReason.NON_POSITIVE_AMOUNT, kind, client_id, tx_id, detail=str(amount.amount)
        )

    return FundsTransaction(kind=kind, client_id=client_id, tx_id=tx_id, amount=amount)


@dataclass
class LedgerEntry:
    """
    Accepted deposit or withdrawal held in transaction history.

    Everything except the dispute flags is fixed once accepted.
    """

    tx_id: int
    kind: TransactionKind
    client_id: int
    amount: Money
    disputed: bool = False
    charged_back: bool = False

    @classmethod
    def from_transaction(cls, transaction: FundsTransaction) -> "LedgerEntry":
        """Create a ledger entry for an accepted funds transaction."""
        return cls(
            tx_id=transaction.tx_id,
            kind=transaction.kind,
            client_id=transaction.client_id,
            amount=transaction.amount,
        )

    @property
    def state(self) -> EntryState:
        """Current dispute lifecycle state."""
        if self.charged_back:
            return EntryState.CHARGED_BACK
        if self.disputed:
            return EntryState.DISPUTED
        return EntryState.ACCEPTED


@dataclass
class Account:
    """
    Balance record for one client.

    `available` may go negative when a withdrawal is disputed after its funds
    already left. The account is frozen while any dispute is open, and stays
    frozen forever after a chargeback.
    """

    client_id: int
    available: Money = field(default_factory=Money.zero)
    held: Money = field(default_factory=Money.zero)
    total: Money = field(default_factory=Money.zero)
    lock_count: int = 0

    @property
    def locked(self) -> bool:
        """Frozen accounts reject deposits and withdrawals."""
        return self.lock_count > 0

    def is_balanced(self) -> bool:
        """Check total == available + held."""
        return validate_balance(self.available.amount, self.held.amount, self.total.amount)

    def increment_locks(self) -> None:
        """Add an open dispute, saturating at MAX_LOCK_COUNT."""
        self.lock_count = min(self.lock_count + 1, MAX_LOCK_COUNT)

    def decrement_locks(self) -> None:
        """Close an open dispute, saturating at zero."""
        self.lock_count = max(self.lock_count - 1, 0)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the output row layout."""
        return {
            "client": self.client_id,
            "available": self.available.amount,
            "held": self.held.amount,
            "total": self.total.amount,
            "locked": self.locked,
        }


@dataclass(frozen=True)
class Rejection:
    """A discarded transaction and the reason it was discarded."""

    kind: TransactionKind
    client_id: int
    tx_id: int
    reason: RejectionReason
    detail: str = ""

    @classmethod
    def from_record(cls, record: TransactionRecord, reason: RejectionReason, detail: str = "") -> "Rejection":
        return cls(
            kind=record.kind,
            client_id=record.client_id,
            tx_id=record.tx_id,
            reason=reason,
            detail=detail,
        )

    def __str__(self) -> str:
        message = f"{self.kind.value} tx {self.tx_id} for client {self.client_id} rejected: {self.reason.value}"
        if self.detail:
            message += f" ({self.detail})"
        return message


@dataclass
class ProcessingSummary:
    """
    Outcome counts for one run over a transaction feed.

    Rejections include both records discarded by the processor and rows
    discarded at decode time for a missing or non-positive amount.
    """

    applied: int = 0
    rejected: int = 0
    skipped_unknown: int = 0
    applied_by_kind: dict[str, int] = field(default_factory=dict)
    rejections_by_reason: dict[str, int] = field(default_factory=dict)

    @property
    def total_processed(self) -> int:
        """Records that reached validation (unknown kinds excluded)."""
        return self.applied + self.rejected

    @property
    def success_rate(self) -> float:
        """Calculate success rate as percentage."""
        if self.total_processed == 0:
            return 0.0
        return (self.applied / self.total_processed) * 100

    def record_applied(self, kind: TransactionKind) -> None:
        self.applied += 1
        self.applied_by_kind[kind.value] = self.applied_by_kind.get(kind.value, 0) + 1

    def record_rejection(self, rejection: Rejection) -> None:
        self.rejected += 1
        key = rejection.reason.value
        self.rejections_by_reason[key] = self.rejections_by_reason.get(key, 0) + 1
