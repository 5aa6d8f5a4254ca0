from functools import lru_cache

from app.core.config import Settings, get_settings
from app.models.common import HealthResponse, utc_now


class HealthService:
    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def get_health(self) -> HealthResponse:
        return HealthResponse(
            status="ok",
            timestamp=utc_now(),
            message=f"{self.settings.api_title} is running successfully",
        )


@lru_cache
def get_health_service() -> HealthService:
    return HealthService()
