from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from api.dependencies import get_api_config
from planner_ai.models import ApiConfig

router = APIRouter()


@router.get("/api/health")
async def health_check() -> dict:
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }


@router.get("/api/config")
async def get_config(config: ApiConfig = Depends(get_api_config)) -> dict:
    """Client-facing view of the relay configuration; the key itself stays here."""
    return config.public_view()


@router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus scrape endpoint.
    """
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
