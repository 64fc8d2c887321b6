"""
Pytest configuration and shared fixtures for votetree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Isolates the process-wide default config between tests
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

_common = importlib.import_module("fixtures.common")

make_leaves = _common.make_leaves
make_tree = _common.make_tree
make_ballot_box = _common.make_ballot_box

from votetree.config.runtime import set_default_config


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def _reset_default_config(monkeypatch):
    """Each test starts without a cached default config or VOTETREE_* env."""
    for var in (
        "VOTETREE_STRICT_DUPLICATES",
        "VOTETREE_REQUIRE_EXPLICIT_SALT",
        "VOTETREE_BALLOT_OPTIONS",
        "VOTETREE_LOG_LEVEL",
        "VOTETREE_LOG_FILE",
    ):
        monkeypatch.delenv(var, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def three_leaf_tree():
    """Tree over the literal leaves h1, h2, h3."""
    return make_tree(leaves=["h1", "h2", "h3"])


@pytest.fixture
def five_leaves():
    return make_leaves(5)


@pytest.fixture
def ballot_box():
    return make_ballot_box()


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
