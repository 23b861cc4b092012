"""
Command Line Interface Package

Entry point for running a transaction feed from the shell.

Command Structure:
- ledger-engine INPUT_PATH: process the feed and print client balances as CSV

Output Streams:
- stdout carries only the balance table
- stderr carries errors, the optional --verbose summary and optional
  per-transaction rejection lines
"""
