"""
CLI Lookup Command

Show the amount, proof and claim calldata for one address.

Usage:
    distributor lookup ADDRESS [--bundle PATH] [--json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from core.schemas.errors import BundleException
from orchestrator.lookup import ClaimInfo, lookup_claim

from distributor_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    get_config,
    read_bundle,
)


def print_claim_human(info: ClaimInfo, unit: str) -> None:
    """Print claim info in human-readable format."""
    data = info.to_dict(unit)
    print(f"address: {info.recipient}")
    print(f"amount: {data['amount_formatted']} {unit} ({info.amount})")
    print(f"leaf: {info.leaf}")
    print(f"proof ({len(info.proof)}):")
    for sibling in info.proof:
        print(f"  {sibling}")
    print(f"valid: {str(info.valid).lower()}")
    print(f"calldata: {info.calldata}")


def lookup_cmd(args: Namespace) -> int:
    """
    Execute the lookup command.

    Returns:
        Exit code (2 if the address is not eligible)
    """
    unit = get_config(args).source.unit

    try:
        bundle = read_bundle(args)
    except BundleException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        info = lookup_claim(bundle, args.address)
    except BundleException as e:
        if args.json:
            print(json.dumps({"address": args.address, "eligible": False, "error": e.message}, indent=2))
        else:
            print(e.message, file=sys.stderr)
        return EXIT_VERIFICATION_FAILED

    if args.json:
        print(json.dumps({"eligible": True, **info.to_dict(unit)}, indent=2))
    else:
        print_claim_human(info, unit)
    return EXIT_SUCCESS
