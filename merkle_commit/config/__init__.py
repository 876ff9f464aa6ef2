"""
Runtime Configuration Module

Provides configuration loading and management for merkle_commit.
"""

from .runtime import (
    HashingConfig,
    LoggingConfig,
    RuntimeConfig,
    configure_logging,
    default_hasher,
    get_default_config,
    set_default_config,
)

__all__ = [
    "HashingConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "configure_logging",
    "default_hasher",
    "get_default_config",
    "set_default_config",
]
