"""
Runtime Configuration

Central configuration for hashing defaults and library logging.
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from merkle_commit.crypto.hashing import Hasher, get_hasher
from merkle_commit.schemas.errors import (
    ConfigurationException,
    UnknownHashAlgorithmException,
)

load_dotenv()

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_LOG_LEVELS: dict[str, int] = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


@dataclass
class HashingConfig:
    """Configuration for leaf and parent hashing."""
    default_algorithm: str = "sha3_256"

    def __post_init__(self):
        if not isinstance(self.default_algorithm, str):
            raise ConfigurationException(
                "Hash algorithm name must be a string, "
                f"got {type(self.default_algorithm).__name__}",
                field_path="hashing.default_algorithm",
                details={"value": repr(self.default_algorithm)},
            )
        try:
            get_hasher(self.default_algorithm)
        except UnknownHashAlgorithmException as e:
            raise ConfigurationException(
                e.message,
                field_path="hashing.default_algorithm",
                details=e.details,
            ) from e

    @property
    def hasher(self) -> Hasher:
        return get_hasher(self.default_algorithm)


@dataclass
class LoggingConfig:
    """Configuration for library logging."""
    level: str | int = "WARNING"
    format: str = DEFAULT_LOG_FORMAT

    def __post_init__(self):
        if isinstance(self.level, bool) or not isinstance(self.level, (str, int)):
            raise ConfigurationException(
                f"Log level must be a name or a number, got {type(self.level).__name__}",
                field_path="logging.level",
                details={"value": repr(self.level)},
            )

    @property
    def level_number(self) -> int:
        """Numeric level; unknown names fall back to WARNING."""
        if isinstance(self.level, int):
            return self.level
        return _LOG_LEVELS.get(self.level.strip().upper(), logging.WARNING)


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for merkle_commit.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hashing: HashingConfig = field(default_factory=HashingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLE_COMMIT_HASH_ALGORITHM: default hash algorithm name
        - MERKLE_COMMIT_LOG_LEVEL: logging level name
        """
        overrides: dict[str, Any] = {}

        if os.getenv("MERKLE_COMMIT_HASH_ALGORITHM"):
            overrides.setdefault("hashing", {})["default_algorithm"] = os.getenv(
                "MERKLE_COMMIT_HASH_ALGORITHM"
            )
        if os.getenv("MERKLE_COMMIT_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv("MERKLE_COMMIT_LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationException(
                f"Config file must contain a mapping, got {type(data).__name__}",
                details={"path": str(path)},
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hashing_data = data.get("hashing") or {}
        logging_data = data.get("logging") or {}

        try:
            hashing = HashingConfig(**hashing_data)
            logging_config = LoggingConfig(**logging_data)
        except TypeError as e:
            raise ConfigurationException(f"Invalid configuration: {e}") from e

        return cls(
            hashing=hashing,
            logging=logging_config,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        if "hashing" in overrides:
            new_config.hashing = HashingConfig(**overrides["hashing"])
        if "logging" in overrides:
            for key, value in overrides["logging"].items():
                setattr(new_config.logging, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hashing": {
                "default_algorithm": self.hashing.default_algorithm,
            },
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to env-derived defaults)."""
    global _default_config
    _default_config = config


def default_hasher() -> Hasher:
    """Hash algorithm selected by the default configuration."""
    return get_default_config().hashing.hasher


def configure_logging(config: Optional[RuntimeConfig] = None) -> None:
    """Install a basic root handler at the configured level."""
    config = config or get_default_config()
    logging.basicConfig(
        level=config.logging.level_number,
        format=config.logging.format,
    )
    logging.getLogger("merkle_commit").setLevel(config.logging.level_number)
