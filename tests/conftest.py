"""
Pytest configuration and shared fixtures for merkle_commit tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

import importlib

_leaves = importlib.import_module("fixtures.leaves")

make_leaves = _leaves.make_leaves
full_root = _leaves.full_root

from merkle_commit.config import RuntimeConfig, set_default_config


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Pin the default config so env vars and .env files do not leak into tests."""
    monkeypatch.delenv("MERKLE_COMMIT_HASH_ALGORITHM", raising=False)
    monkeypatch.delenv("MERKLE_COMMIT_LOG_LEVEL", raising=False)
    config = RuntimeConfig()
    set_default_config(config)
    yield config
    set_default_config(None)


@pytest.fixture
def leaves():
    """SHA3-256 leaves for the strings "0" through "4"."""
    return make_leaves()


@pytest.fixture
def reference_root(leaves):
    """Hand-built root for the five reference leaves."""
    return full_root(leaves)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
