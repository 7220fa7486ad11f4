"""
Merkle Distributor CLI

Command-line interface for generating and inspecting distributions.

Usage:
    python -m distributor_cli generate --source rewards.csv --out proofs.json
    python -m distributor_cli lookup 0xAbC...
    python -m distributor_cli stats --top 10
    python -m distributor_cli verify 0xAbC...
"""

__version__ = "0.1.0"
