"""
Health API Endpoint
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Depends

from app.api.deps import get_marketstack_client, get_polygon_client
from app.schemas.market import HealthResponse, ProviderKeyStatus
from app.services.providers import MarketstackClient, PolygonClient

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(
    polygon: PolygonClient = Depends(get_polygon_client),
    marketstack: MarketstackClient = Depends(get_marketstack_client),
):
    """Process status and which provider keys are configured. No upstream calls."""
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return HealthResponse(
        status="OK",
        timestamp=timestamp.replace("+00:00", "Z"),
        apis=ProviderKeyStatus(
            polygon=polygon.is_configured,
            marketstack=marketstack.is_configured,
        ),
    )
