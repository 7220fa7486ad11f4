"""
Pytest configuration and shared fixtures for the Merkle distributor tests.

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

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_address = _common.make_address
make_allocations = _common.make_allocations
make_tree = _common.make_tree
make_distributor = _common.make_distributor
make_opened_distributor = _common.make_opened_distributor


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def authority():
    return _common.AUTHORITY


@pytest.fixture
def owner():
    return _common.OWNER


@pytest.fixture
def allocations():
    """Three recipients with 100, 200 and 300."""
    return make_allocations()


@pytest.fixture
def tree(allocations):
    """AllocationTree over the default allocations."""
    return make_tree(allocations)


@pytest.fixture
def clock():
    from core.distributor import ManualClock
    return ManualClock(_common.START_TIME)


@pytest.fixture
def ledger():
    from core.distributor import Ledger
    return Ledger()


@pytest.fixture
def distributor(ledger, clock):
    """Unopened distributor with a funded authority."""
    return make_distributor(ledger=ledger, clock=clock)


@pytest.fixture
def opened_distributor(ledger, clock, tree):
    """Distributor opened over `tree`, deposit equal to the tree total."""
    distributor, _ = make_opened_distributor(tree, ledger=ledger, clock=clock)
    return distributor


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
