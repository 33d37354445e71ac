"""Health check endpoint for load balancers and monitoring."""

from typing import Dict

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health_check() -> Dict[str, str]:
    """Basic liveness check.  The store is in-process, so there is nothing else to probe."""
    return {"status": "ok"}
