"""
CLI command modules.
"""

from distributor_cli.commands import generate, lookup, stats, verify

__all__ = ["generate", "lookup", "stats", "verify"]
