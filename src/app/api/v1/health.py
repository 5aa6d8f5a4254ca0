from fastapi import APIRouter, Depends

from app.core.errors import boundary
from app.models.common import ErrorResponse, HealthResponse
from app.services.health import HealthService, get_health_service

router = APIRouter(prefix="/api", tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    operation_id="GetHealth",
    summary="Verificar el estado de la API",
    description="Endpoint para verificar que la API está funcionando correctamente",
    responses={500: {"model": ErrorResponse}},
)
@boundary
async def health(service: HealthService = Depends(get_health_service)) -> HealthResponse:
    return service.get_health()
