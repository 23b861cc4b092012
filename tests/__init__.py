"""
Test Suite for the Client Ledger Engine

Test Structure:
- fixtures/: Shared feed builders and utilities
- unit/: Unit tests mirroring src/ package structure
- integration/: Whole-feed processing and CLI tests
- e2e/: Installed CLI run as a subprocess

Test Data:
All transaction feeds are small synthetic CSV files written per test.
"""
