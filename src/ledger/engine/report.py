#!/usr/bin/env python3
"""
Balance Snapshot Report

Renders final client balances as a CSV table with columns
`client, available, held, total, locked`.
"""

import io
from collections.abc import Iterable
from typing import IO

import pandas as pd

from ..core.currency import DISPLAY_PLACES, format_amount
from .models import Account

OUTPUT_COLUMNS = ["client", "available", "held", "total", "locked"]


def accounts_to_dataframe(accounts: Iterable[Account], precision: int = DISPLAY_PLACES) -> pd.DataFrame:
    """
    Convert accounts to a display-ready DataFrame.

    Amounts are rounded to `precision` fractional digits and rendered as
    strings; `locked` is rendered as lowercase true/false. Rows are ordered
    by client id.

    Args:
        accounts: Final client accounts
        precision: Fractional digits for amounts

    Returns:
        DataFrame with OUTPUT_COLUMNS
    """
    rows = []
    for account in sorted(accounts, key=lambda a: a.client_id):
        row = account.to_dict()
        rows.append(
            {
                "client": row["client"],
                "available": format_amount(row["available"], precision),
                "held": format_amount(row["held"], precision),
                "total": format_amount(row["total"], precision),
                "locked": "true" if row["locked"] else "false",
            }
        )

    return pd.DataFrame(rows, columns=OUTPUT_COLUMNS)


def render_accounts_csv(accounts: Iterable[Account], precision: int = DISPLAY_PLACES) -> str:
    """Render accounts as CSV text, header included."""
    buffer = io.StringIO()
    write_accounts_csv(accounts, buffer, precision)
    return buffer.getvalue()


def write_accounts_csv(accounts: Iterable[Account], stream: IO[str], precision: int = DISPLAY_PLACES) -> None:
    """
    Write accounts as CSV to a text stream.

    Args:
        accounts: Final client accounts
        stream: Destination, e.g. sys.stdout
        precision: Fractional digits for amounts
    """
    df = accounts_to_dataframe(accounts, precision)
    df.to_csv(stream, index=False, lineterminator="\n")
