"""
Pytest configuration and shared fixtures for Merkle library tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Resets the process-wide default configuration between tests
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
make_records = _common.make_records
flip_byte = _common.flip_byte
manual_root = _common.manual_root

from merkle_validation.config.runtime import set_default_config
from merkle_validation.crypto.hashing import Hasher
from merkle_validation.merkle.merkle_tree import MerkleTree


_ENV_VARS = (
    "MERKLE_HASH_ALGORITHM",
    "MERKLE_MAX_PROOF_LENGTH",
    "MERKLE_MAX_LEAF_COUNT",
    "MERKLE_LOG_LEVEL",
)


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def clean_default_config(monkeypatch):
    """Give every test a default config built from a clean environment."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def hasher():
    return Hasher()


@pytest.fixture
def abc_leaves():
    return [b"a", b"b", b"c"]


@pytest.fixture
def abc_tree(abc_leaves, hasher):
    return MerkleTree.build(abc_leaves, hasher)


@pytest.fixture
def seven_leaves():
    return make_leaves(7)


@pytest.fixture
def seven_tree(seven_leaves, hasher):
    return MerkleTree.build(seven_leaves, hasher)
