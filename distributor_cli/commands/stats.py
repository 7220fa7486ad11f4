"""
CLI Stats Command

Summarize a proof bundle.

Usage:
    distributor stats [--bundle PATH] [--top N] [--json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from core.schemas.errors import BundleException
from orchestrator.lookup import distribution_stats, format_amount

from distributor_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    get_config,
    read_bundle,
)


def stats_cmd(args: Namespace) -> int:
    """Execute the stats command."""
    unit = get_config(args).source.unit

    try:
        bundle = read_bundle(args)
    except BundleException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    stats = distribution_stats(bundle, top=args.top)

    if args.json:
        print(json.dumps(stats.to_dict(unit), indent=2))
        return EXIT_SUCCESS

    print(f"root: {stats.root}")
    print(f"claimants: {stats.total_claimants}")
    print(f"total: {format_amount(stats.total_amount, unit)} {unit}")
    print(f"average: {format_amount(stats.average_amount, unit)} {unit}")
    print(f"max proof length: {stats.max_proof_length}")
    if stats.top_claimants:
        print(f"\ntop {len(stats.top_claimants)}:")
        for rank, (recipient, amount) in enumerate(stats.top_claimants, start=1):
            print(f"  {rank}. {recipient}  {format_amount(amount, unit)} {unit}")
    return EXIT_SUCCESS
