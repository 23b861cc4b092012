"""
Core Utilities Package

Shared primitives used by the transaction engine and the CLI.

This package provides:
- Currency parsing and display rounding with exact Decimal arithmetic
- The Money value type
- Configuration management for environment-specific settings
"""

from .config import (
    Config,
    Environment,
    get_config,
    reload_config,
)
from .currency import (
    DISPLAY_PLACES,
    format_amount,
    parse_amount,
    round_for_display,
    validate_balance,
)
from .money import Money

__all__ = [
    # Configuration
    "Config",
    "DISPLAY_PLACES",
    "Environment",
    "Money",
    "format_amount",
    "get_config",
    # Currency utilities
    "parse_amount",
    "reload_config",
    "round_for_display",
    "validate_balance",
]
