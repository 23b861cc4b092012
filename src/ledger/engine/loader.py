#!/usr/bin/env python3
"""
Transaction Feed Loader

Decodes a header-bearing CSV feed with columns `type, client, tx, amount`
into validated transaction records.

Two kinds of bad input are distinguished:
- Structural problems (unreadable file, missing columns, rows with extra
  fields, non-integer ids, non-numeric amounts) abort the whole run with
  FeedDecodeError
- Rows naming an unrecognized type are skipped, and deposit/withdrawal rows
  with a missing or non-positive amount are reported as rejections
"""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pandas as pd

from ..core.currency import parse_amount
from ..core.money import Money
from .models import (
    LedgerError,
    TransactionKind,
    TransactionRecord,
    TransactionValidationError,
    build_record,
)

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["type", "client", "tx"]
AMOUNT_COLUMN = "amount"

InvalidRowCallback = Callable[[TransactionValidationError], None]


class FeedDecodeError(LedgerError):
    """Raised when the feed cannot be read or a row cannot be decoded at all."""

    pass


def read_feed(path: str | Path) -> pd.DataFrame:
    """
    Read a transaction feed into a DataFrame of trimmed strings.

    Args:
        path: Path to the CSV feed

    Returns:
        DataFrame with at least the type, client and tx columns plus amount.
        An empty file yields an empty frame.

    Raises:
        FeedDecodeError: If the file is missing, unreadable or malformed
    """
    path = Path(path)
    if not path.is_file():
        raise FeedDecodeError(f"Transaction feed not found: {path}")

    try:
        # The header line fixes the row width; wider rows fail to tokenize
        raw = pd.read_csv(path, header=None, dtype=str, keep_default_na=False, skipinitialspace=True)
    except pd.errors.EmptyDataError:
        logger.info("Transaction feed %s is empty", path)
        return pd.DataFrame(columns=REQUIRED_COLUMNS + [AMOUNT_COLUMN])
    except pd.errors.ParserError as e:
        raise FeedDecodeError(f"Malformed transaction feed {path}: {str(e).strip()}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise FeedDecodeError(f"Cannot read transaction feed {path}: {e}") from e

    df = raw.iloc[1:].reset_index(drop=True)
    df.columns = [str(column).strip() for column in raw.iloc[0]]

    missing = [column for column in REQUIRED_COLUMNS if column not in df.columns]
    if missing:
        raise FeedDecodeError(f"Transaction feed {path} is missing columns: {', '.join(missing)}")

    # A feed may omit the amount column entirely
    if AMOUNT_COLUMN not in df.columns:
        df[AMOUNT_COLUMN] = ""

    # Short rows come back as NaN
    df = df.fillna("")
    for column in df.columns:
        df[column] = df[column].astype(str).str.strip()

    logger.info("Read %d rows from %s", len(df), path)
    return df


def _parse_id(value: str, column: str, line_number: int) -> int:
    """Parse an unsigned integer id field."""
    # ASCII digits only
    if not (value.isascii() and value.isdigit()):
        raise FeedDecodeError(f"Line {line_number}: invalid {column} {value!r}")
    return int(value)


def decode_row(row: dict[str, Any], line_number: int) -> TransactionRecord | None:
    """
    Decode one feed row.

    Args:
        row: Mapping of trimmed column name to trimmed field text
        line_number: 1-based line number in the feed, for error messages

    Returns:
        Validated record, or None if the type is unrecognized

    Raises:
        FeedDecodeError: If the row is structurally invalid
        TransactionValidationError: If a deposit/withdrawal amount is missing or not positive
    """
    client_id = _parse_id(row["client"], "client", line_number)
    tx_id = _parse_id(row["tx"], "tx", line_number)

    kind = TransactionKind.parse(row["type"])
    if kind is None:
        logger.debug("Line %d: skipping unrecognized transaction type %r", line_number, row["type"])
        return None

    amount = None
    if kind.moves_funds:
        try:
            value = parse_amount(row[AMOUNT_COLUMN])
        except ValueError as e:
            raise FeedDecodeError(f"Line {line_number}: {e}") from e
        if value is not None:
            amount = Money.from_decimal(value)

    return build_record(kind, client_id, tx_id, amount)


class TransactionFeed:
    """
    Iterable over the validated records of a CSV feed, in file order.

    Rows with an unrecognized type are counted in `skipped_unknown`.
    Rows that fail amount validation are counted in `invalid_count` and
    handed to `on_invalid`.

    Example:
        >>> feed = TransactionFeed("transactions.csv")
        >>> for record in feed:
        ...     print(record.kind, record.client_id, record.tx_id)
    """

    def __init__(self, path: str | Path, on_invalid: InvalidRowCallback | None = None):
        self.path = Path(path)
        self.on_invalid = on_invalid
        self.rows_read = 0
        self.skipped_unknown = 0
        self.invalid_count = 0

    def __iter__(self) -> Iterator[TransactionRecord]:
        df = read_feed(self.path)

        # Header is line 1
        for line_number, row in enumerate(df.to_dict("records"), start=2):
            self.rows_read += 1
            try:
                record = decode_row(row, line_number)
            except TransactionValidationError as e:
                self.invalid_count += 1
                logger.debug("Line %d: %s", line_number, e)
                if self.on_invalid is not None:
                    self.on_invalid(e)
                continue

            if record is None:
                self.skipped_unknown += 1
                continue

            yield record


def load_transactions(path: str | Path) -> list[TransactionRecord]:
    """
    Load every valid record from a CSV feed.

    Invalid deposit/withdrawal rows and unrecognized types are dropped.

    Args:
        path: Path to the CSV feed

    Returns:
        Records in file order

    Raises:
        FeedDecodeError: If the feed cannot be read or a row cannot be decoded
    """
    return list(TransactionFeed(path))
