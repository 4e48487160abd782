"""Health check endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from livraria.core.config import Settings, get_settings
from livraria.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(settings: Annotated[Settings, Depends(get_settings)]) -> HealthResponse:
    """
    Return service health status.
    Used by load balancers and monitoring.
    """
    return HealthResponse(status="ok", environment=settings.APP_ENV)
