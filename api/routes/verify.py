"""
Verify Route

Check a (recipient, amount, proof) triple against the bundle root.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.deps import get_bundle
from api.errors import InvalidRequestError
from api.models.requests import VerifyRequest
from api.models.responses import VerifyResponse
from core.merkle.leaf_codec import MAX_AMOUNT
from core.merkle.merkle_proofs import verify_claim
from core.schemas.bundle import ProofBundle


UINT256_DIGITS = len(str(MAX_AMOUNT))

router = APIRouter(tags=["verification"])


@router.post("/verify", response_model=VerifyResponse)
async def verify(
    body: VerifyRequest,
    bundle: ProofBundle = Depends(get_bundle),
) -> VerifyResponse:
    """
    Verify a proof.

    A malformed proof or address, or an amount above uint256, yields
    valid=false rather than an error; only an amount that is not a
    non-negative integer of at most 78 digits is rejected.
    """
    amount = body.amount
    if not (amount.isascii() and amount.isdigit() and len(amount) <= UINT256_DIGITS):
        raise InvalidRequestError(
            f"amount must be a non-negative integer of at most {UINT256_DIGITS} digits",
            details={"amount": amount[:UINT256_DIGITS + 2]},
        )

    valid = verify_claim(body.recipient, int(amount), body.proof, bundle.root)
    return VerifyResponse(
        ok=True,
        valid=valid,
        root=bundle.root,
        recipient=body.recipient,
        amount=body.amount,
    )
