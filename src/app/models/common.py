from datetime import UTC, datetime

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    return datetime.now(UTC)


class HealthResponse(BaseModel):
    status: str = Field(description="Estado del servicio")
    timestamp: datetime = Field(description="Instante UTC del chequeo")
    message: str = Field(description="Nombre del servicio y su estado")


class ErrorResponse(BaseModel):
    """Uniform envelope returned by every failing request."""

    error: bool = True
    message: str
    details: str | None = None
    timestamp: datetime = Field(default_factory=utc_now)
