from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application runtime configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = Field(default="dev", validation_alias="ENV")
    api_title: str = Field(default="DevSecOpsDemo API", validation_alias="API_TITLE")
    api_description: str = Field(
        default="API de demostración con arquitectura limpia",
        validation_alias="API_DESCRIPTION",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")
    request_id_header: str = Field(default="X-Request-ID")
    root_path: str = Field(default="", validation_alias="ROOT_PATH")

    @property
    def allowed_origins(self) -> list[str]:
        if self.cors_origins.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def docs_enabled(self) -> bool:
        return self.env.strip().lower() == "dev"


@lru_cache
def get_settings() -> Settings:
    return Settings()
