# thaikick/routes/v1/health.py
"""
Health check endpoint for monitoring and load balancers.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Response

from ...core.config import settings
from ...core.constants import API_VERSION, BRAND_NAME

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(response: Response) -> dict:
    response.headers["Cache-Control"] = "no-store"
    return {
        "status": "healthy",
        "service": f"{BRAND_NAME.lower()}-api",
        "version": API_VERSION,
        "environment": settings.environment,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }
