"""
Stats Route

Summary of the loaded distribution.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from api.deps import get_bundle, get_unit
from api.models.responses import StatsResponse
from core.schemas.bundle import ProofBundle
from orchestrator.lookup import distribution_stats


router = APIRouter(tags=["distribution"])


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    top: int = Query(default=5, ge=0, le=100, description="Number of largest claimants"),
    bundle: ProofBundle = Depends(get_bundle),
    unit: str = Depends(get_unit),
) -> StatsResponse:
    """Totals, average and the largest claimants."""
    stats = distribution_stats(bundle, top=top)
    return StatsResponse(ok=True, **stats.to_dict(unit))
