"""
Admin API endpoints for TrueReview monitoring.
"""

from fastapi import APIRouter, Depends

from truereview.api.security import verify_api_token
from truereview.utils.logging_config import metrics


router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(verify_api_token)],
)


@router.get("/metrics")
async def get_metrics():
    """Get current application metrics."""
    return metrics.get_stats()


@router.post("/metrics/reset")
async def reset_metrics():
    """Reset all metrics (use with caution)."""
    metrics.reset()
    return {"status": "ok", "message": "Metrics reset"}
