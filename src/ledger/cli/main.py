#!/usr/bin/env python3
"""
Main CLI Entry Point for the Client Ledger Engine

Reads a CSV transaction feed and prints final client balances as CSV.
"""

import logging
import os
from pathlib import Path

import click

from .. import __version__
from ..core.config import get_config
from ..engine import FeedDecodeError, Rejection, process_file, render_accounts_csv


@click.command()
@click.argument("input_path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Print a processing summary to stderr")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--report-rejections", is_flag=True, help="Print each rejected transaction to stderr")
@click.version_option(__version__, prog_name="ledger-engine")
def main(
    input_path: Path,
    config_env: str | None,
    verbose: bool,
    debug: bool,
    report_rejections: bool,
) -> None:
    """
    Apply the transactions in INPUT_PATH and print client balances.

    INPUT_PATH is a CSV file with columns type, client, tx, amount. The
    balance table (client, available, held, total, locked) is written to
    stdout once the whole feed has been processed.

    Examples:
      ledger-engine transactions.csv > accounts.csv
      ledger-engine --report-rejections transactions.csv
    """
    # Set environment if specified
    if config_env:
        os.environ["LEDGER_ENV"] = config_env

    # Configure debug logging if requested
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    try:
        config = get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("ledger").setLevel(logging.DEBUG)

    on_reject = None
    if report_rejections or config.processing.report_rejections:

        def on_reject(rejection: Rejection) -> None:
            click.echo(str(rejection), err=True)

    try:
        accounts, summary = process_file(input_path, on_reject=on_reject)
    except FeedDecodeError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo(f"Environment: {config.environment.value}", err=True)
        click.echo(f"Input: {input_path}", err=True)
        click.echo(
            f"Transactions: {summary.applied} applied, {summary.rejected} rejected, "
            f"{summary.skipped_unknown} unrecognized",
            err=True,
        )
        for reason, count in sorted(summary.rejections_by_reason.items()):
            click.echo(f"  {reason}: {count}", err=True)
        click.echo(f"Accounts: {len(accounts)}", err=True)

    click.echo(render_accounts_csv(accounts.values(), config.display.precision), nl=False)


if __name__ == "__main__":
    main()
