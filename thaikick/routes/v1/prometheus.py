"""
Prometheus metrics endpoint for monitoring infrastructure.

Public, like any Prometheus scrape target. It exposes metrics collected
from the @measure_operation decorators throughout the application.
"""

from fastapi import APIRouter, Response

from ...monitoring.prometheus_metrics import prometheus_metrics

router = APIRouter(tags=["monitoring"])


@router.get("/prometheus")
def get_prometheus_metrics() -> Response:
    return Response(content=prometheus_metrics.get_metrics(), media_type=prometheus_metrics.content_type)
