"""Application configuration settings."""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    # State backend: "dapr" for the sidecar, "memory" for local runs without one
    state_backend: str = "dapr"

    # Dapr sidecar
    dapr_host: str = "http://localhost"
    dapr_http_port: int = 3501
    state_store_name: str = "mongo"

    # Upper bound on a single state store round trip (seconds)
    state_timeout_seconds: float = 5.0

    # Write back with the ETag that was read, so a concurrent writer makes the
    # second write fail instead of silently clobbering the first.
    optimistic_concurrency: bool = True

    # CORS
    cors_allow_origins: list[str] = ["*"]

    @property
    def dapr_base_url(self) -> str:
        return f"{self.dapr_host.rstrip('/')}:{self.dapr_http_port}"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
