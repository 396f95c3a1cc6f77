from fastapi import APIRouter

from quickadd.core.config import get_settings
from quickadd.schemas.health import HealthResponse
from quickadd.services.health_service import HealthService

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def get_health() -> HealthResponse:
    service = HealthService(get_settings())
    return service.get_status()
