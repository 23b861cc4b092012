#!/usr/bin/env python3
"""
Configuration Management for the Client Ledger Engine

Handles environment-based configuration with validation.
Supports multiple environments (development, test, production) with
appropriate logging for each.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
MAX_DISPLAY_PRECISION = 12


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class DisplayConfig:
    """Output table rendering settings."""

    precision: int = 4


@dataclass
class ProcessingConfig:
    """Transaction processing settings."""

    # Echo every rejected transaction to stderr
    report_rejections: bool = False


@dataclass
class Config:
    """
    Main configuration class for the ledger engine.

    Loads configuration from environment variables with defaults
    and validation for each environment type.
    """

    environment: Environment

    # Component configurations
    display: DisplayConfig
    processing: ProcessingConfig

    # Application settings
    debug: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("LEDGER_ENV", "development"))

        display = DisplayConfig(
            precision=int(os.getenv("LEDGER_DISPLAY_PRECISION", "4")),
        )

        processing = ProcessingConfig(
            report_rejections=_parse_bool(os.getenv("LEDGER_REPORT_REJECTIONS", "false")),
        )

        debug = _parse_bool(os.getenv("DEBUG", "false"))
        default_level = "DEBUG" if debug else "WARNING"

        return cls(
            environment=env,
            display=display,
            processing=processing,
            debug=debug,
            log_level=os.getenv("LOG_LEVEL", default_level).upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}: {self.log_level}")

        if not 0 <= self.display.precision <= MAX_DISPLAY_PRECISION:
            errors.append(f"Display precision must be 0-{MAX_DISPLAY_PRECISION}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.WARNING)

        # Configure format based on environment
        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        # basicConfig streams to stderr; stdout is reserved for the output table
        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")
        logging.getLogger("ledger").setLevel(level)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a plain dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
                # Nested dataclass
                result[field_name] = dict(field_value.__dict__)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


def _parse_bool(value: str) -> bool:
    """Parse a boolean environment flag."""
    return value.strip().lower() in ("1", "true", "yes", "on")


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config = Config.from_environment()

        # Validate configuration
        errors = config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        # Setup logging
        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()

