"""
Claims Route

Per-address claim lookup.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import get_bundle, get_unit
from api.errors import InvalidRequestError, NotEligibleError
from api.models.responses import ClaimResponse
from core.merkle.leaf_codec import normalize_recipient
from core.schemas.bundle import ProofBundle
from orchestrator.lookup import lookup_claim


logger = logging.getLogger(__name__)

router = APIRouter(tags=["distribution"])


@router.get("/claims/{recipient}", response_model=ClaimResponse)
async def get_claim(
    recipient: str,
    bundle: ProofBundle = Depends(get_bundle),
    unit: str = Depends(get_unit),
) -> ClaimResponse:
    """
    Amount, proof and claim calldata for recipient.

    Errors:
        400 INVALID_REQUEST if recipient is not an address
        404 NOT_ELIGIBLE if recipient has no allocation
    """
    try:
        key = normalize_recipient(recipient)
    except (TypeError, ValueError):
        raise InvalidRequestError(f"Invalid address: {recipient}", details={"recipient": recipient})

    if bundle.get_claim(key) is None:
        logger.debug(f"Lookup for ineligible address {key}")
        raise NotEligibleError(key)

    info = lookup_claim(bundle, key)
    return ClaimResponse(ok=True, **info.to_dict(unit))
