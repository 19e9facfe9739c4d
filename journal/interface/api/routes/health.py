"""Health check routes."""

from datetime import datetime, timezone
from typing import Literal

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from journal.config import Settings
from journal.persistence.database import StoreConnection

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "degraded"]
    timestamp: datetime
    version: str
    database: Literal["connected", "unavailable"]


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings],
    store_connection: FromDishka[StoreConnection],
) -> HealthResponse:
    """Basic health check endpoint.

    The service stays up without its store, so an unreachable database
    reports "degraded" rather than failing the check.
    """
    connected = await store_connection.check()
    return HealthResponse(
        status="healthy" if connected else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=settings.version,
        database="connected" if connected else "unavailable",
    )
