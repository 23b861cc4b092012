"""
Test Fixtures and Utilities

Shared helpers for building CSV transaction feeds and test environments.
"""
