"""
CLI Generate Command

Read the allocation report, build the tree and write the proof bundle.

Usage:
    distributor generate [--source PATH|URL] [--out PATH] [--json]
"""

from __future__ import annotations

import dataclasses
import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from core.http import HttpClient
from core.schemas.errors import DistributorException
from orchestrator.allocations import load_allocation_source
from orchestrator.artifacts.io import save_bundle
from orchestrator.generate import generate_distribution
from orchestrator.lookup import format_amount

from distributor_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, get_config


logger = logging.getLogger(__name__)


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def generate_cmd(args: Namespace) -> int:
    """
    Execute the generate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = get_config(args)

    source_config = config.source
    if args.source:
        if _is_url(args.source):
            source_config = dataclasses.replace(source_config, url=args.source, path=None)
        else:
            source_config = dataclasses.replace(source_config, path=args.source)

    out_path = Path(args.out or config.output.proofs_path)

    try:
        with HttpClient.from_config(config.http) as client:
            allocations = load_allocation_source(source_config, client=client)
        result = generate_distribution(allocations)
        save_bundle(result.bundle, out_path)
    except DistributorException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = {
        "source": source_config.location,
        "output": str(out_path),
        "root": result.root,
        "total_amount": str(result.total_amount),
        "total_claimants": result.total_claimants,
        "depth": result.tree.tree.depth,
    }

    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        print(f"root: {summary['root']}")
        print(f"claimants: {result.total_claimants}")
        print(f"total: {format_amount(result.total_amount, source_config.unit)} {source_config.unit}")
        print(f"written: {out_path}")

    return EXIT_SUCCESS
