"""
Test fixtures package for the Merkle distributor tests.

- common.py: Address, allocation, tree and distributor factories

Usage:
    from fixtures.common import make_allocations, make_opened_distributor

    def test_something():
        distributor, tree = make_opened_distributor()
"""

from .common import (
    AUTHORITY,
    DISTRIBUTOR_ADDRESS,
    OWNER,
    START_TIME,
    make_address,
    make_allocations,
    make_distributor,
    make_opened_distributor,
    make_tree,
)

__all__ = [
    "AUTHORITY",
    "DISTRIBUTOR_ADDRESS",
    "OWNER",
    "START_TIME",
    "make_address",
    "make_allocations",
    "make_distributor",
    "make_opened_distributor",
    "make_tree",
]
