"""
CLI Verify Command

Check a (recipient, amount, proof) triple against the bundle root.
Without --amount/--proof the bundle's own entry for the address is
checked; with them, the given values are checked instead.

Usage:
    distributor verify ADDRESS [--bundle PATH] [--amount N --proof H ...] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace

from core.schemas.errors import BundleException
from core.merkle.merkle_proofs import verify_claim

from distributor_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    read_bundle,
)


logger = logging.getLogger(__name__)


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        0 if the proof verifies, 2 if it does not, 1 on errors
    """
    if (args.amount is None) != (args.proof is None):
        print("Error: --amount and --proof must be given together", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        bundle = read_bundle(args)
    except BundleException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.amount is not None:
        amount, proof = args.amount, list(args.proof)
    else:
        claim = bundle.get_claim(args.address)
        if claim is None:
            amount, proof = None, []
        else:
            amount, proof = claim.amount_value, list(claim.proof)

    valid = amount is not None and verify_claim(args.address, amount, proof, bundle.root)
    logger.debug(f"verify {args.address} amount={amount} -> {valid}")

    result = {
        "address": args.address,
        "root": bundle.root,
        "amount": None if amount is None else str(amount),
        "proof": proof,
        "valid": valid,
    }
    if args.json:
        print(json.dumps(result, indent=2))
    else:
        status = "✓ valid" if valid else "✗ invalid"
        print(f"{args.address}: {status}")
        if amount is None:
            print("  address has no entry in the bundle")

    return EXIT_SUCCESS if valid else EXIT_VERIFICATION_FAILED
