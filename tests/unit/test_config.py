"""
Runtime Configuration Unit Tests
Tests for merkle_commit/config/runtime.py
"""
import logging

import pytest

from merkle_commit.config import (
    HashingConfig,
    LoggingConfig,
    RuntimeConfig,
    configure_logging,
    default_hasher,
    get_default_config,
    set_default_config,
)
from merkle_commit.crypto import KECCAK256, SHA3_256, SHA3_512
from merkle_commit.merkle import MerkleTree
from merkle_commit.schemas.errors import ConfigurationException


class TestDefaults:
    """Tests for default configuration values."""

    def test_default_algorithm(self):
        assert RuntimeConfig().hashing.default_algorithm == "sha3_256"
        assert RuntimeConfig().hashing.hasher is SHA3_256

    def test_default_log_level(self):
        assert RuntimeConfig().logging.level_number == logging.WARNING

    def test_unknown_level_falls_back(self):
        assert LoggingConfig(level="chatty").level_number == logging.WARNING

    def test_numeric_level(self):
        assert LoggingConfig(level=10).level_number == logging.DEBUG

    def test_level_name_case_insensitive(self):
        assert LoggingConfig(level=" info ").level_number == logging.INFO

    def test_module_attribute_is_not_a_level(self):
        """Only real level names map; other logging attributes fall back."""
        assert LoggingConfig(level="basic_format").level_number == logging.WARNING

    def test_invalid_level_type_raises(self):
        with pytest.raises(ConfigurationException) as exc_info:
            LoggingConfig(level=["DEBUG"])

        assert exc_info.value.details["field_path"] == "logging.level"

    def test_invalid_algorithm_raises(self):
        with pytest.raises(ConfigurationException) as exc_info:
            HashingConfig(default_algorithm="md5")

        assert exc_info.value.details["field_path"] == "hashing.default_algorithm"


class TestLoading:
    """Tests for from_dict / from_env / from_yaml."""

    def test_from_dict_partial(self):
        config = RuntimeConfig.from_dict({"hashing": {"default_algorithm": "keccak256"}})

        assert config.hashing.hasher is KECCAK256
        assert config.logging.level == "WARNING"

    def test_from_dict_unknown_key_raises(self):
        with pytest.raises(ConfigurationException, match="Invalid configuration"):
            RuntimeConfig.from_dict({"hashing": {"algo": "sha256"}})

    def test_to_dict_round_trip(self):
        config = RuntimeConfig.from_dict(
            {"hashing": {"default_algorithm": "sha3_512"}, "logging": {"level": "DEBUG"}}
        )

        assert RuntimeConfig.from_dict(config.to_dict()) == config

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("MERKLE_COMMIT_HASH_ALGORITHM", "sha3-512")
        monkeypatch.setenv("MERKLE_COMMIT_LOG_LEVEL", "DEBUG")

        config = RuntimeConfig.from_env()

        assert config.hashing.hasher is SHA3_512
        assert config.logging.level == "DEBUG"

    def test_with_env_overrides(self, monkeypatch):
        base = RuntimeConfig.from_dict({"logging": {"level": "INFO"}})
        monkeypatch.setenv("MERKLE_COMMIT_HASH_ALGORITHM", "keccak256")

        overridden = base.with_env_overrides()

        assert overridden.hashing.hasher is KECCAK256
        assert overridden.logging.level == "INFO"
        assert base.hashing.default_algorithm == "sha3_256"

    def test_with_env_overrides_noop(self):
        config = RuntimeConfig()

        assert config.with_env_overrides() is config

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "merkle.yaml"
        path.write_text(
            "hashing:\n"
            "  default_algorithm: keccak256\n"
            "logging:\n"
            "  level: INFO\n"
        )

        config = RuntimeConfig.from_yaml(path)

        assert config.hashing.hasher is KECCAK256
        assert config.logging.level == "INFO"

    def test_from_yaml_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert RuntimeConfig.from_yaml(path) == RuntimeConfig()

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "missing.yaml")

    def test_from_yaml_not_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_yaml(path)

    def test_from_yaml_numeric_algorithm_raises(self, tmp_path):
        """A non-string algorithm name is a configuration error."""
        path = tmp_path / "numeric.yaml"
        path.write_text("hashing:\n  default_algorithm: 256\n")

        with pytest.raises(ConfigurationException) as exc_info:
            RuntimeConfig.from_yaml(path)

        assert exc_info.value.details["field_path"] == "hashing.default_algorithm"

    def test_from_yaml_numeric_log_level(self, tmp_path):
        """Numeric log levels are used as-is."""
        path = tmp_path / "level.yaml"
        path.write_text("logging:\n  level: 10\n")

        assert RuntimeConfig.from_yaml(path).logging.level_number == logging.DEBUG


class TestDefaultConfig:
    """Tests for the process-wide default configuration."""

    def test_set_default_changes_tree_hasher(self):
        set_default_config(RuntimeConfig.from_dict({"hashing": {"default_algorithm": "keccak256"}}))

        assert default_hasher() is KECCAK256
        assert MerkleTree().hasher is KECCAK256

    def test_reset_reloads_from_env(self, monkeypatch):
        monkeypatch.setenv("MERKLE_COMMIT_HASH_ALGORITHM", "sha3_512")
        set_default_config(None)

        assert get_default_config().hashing.hasher is SHA3_512

    def test_configure_logging_sets_package_level(self):
        package_logger = logging.getLogger("merkle_commit")
        previous = package_logger.level
        try:
            configure_logging(RuntimeConfig.from_dict({"logging": {"level": "DEBUG"}}))

            assert package_logger.level == logging.DEBUG
        finally:
            package_logger.setLevel(previous)
