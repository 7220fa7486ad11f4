"""
Off-ledger Distribution Tooling

Turns an allocation report into a committed root and a proof bundle,
and answers lookups against that bundle.

Public API:
- parse_allocation_csv / load_allocation_source: Read the allocation table
- generate_distribution / GenerationResult: Build tree and proof bundle
- save_bundle / load_bundle: Persist proof bundles
- lookup_claim / distribution_stats / encode_claim_calldata / format_amount
"""

from orchestrator.allocations import load_allocation_source, parse_allocation_csv
from orchestrator.artifacts.io import load_bundle, save_bundle
from orchestrator.generate import GenerationResult, generate_distribution
from orchestrator.lookup import (
    CLAIM_SELECTOR,
    CLAIM_SIGNATURE,
    ClaimInfo,
    DistributionStats,
    distribution_stats,
    encode_claim_calldata,
    format_amount,
    lookup_claim,
)

__all__ = [
    "parse_allocation_csv",
    "load_allocation_source",
    "generate_distribution",
    "GenerationResult",
    "save_bundle",
    "load_bundle",
    "CLAIM_SELECTOR",
    "CLAIM_SIGNATURE",
    "ClaimInfo",
    "DistributionStats",
    "distribution_stats",
    "encode_claim_calldata",
    "format_amount",
    "lookup_claim",
]
