"""Library configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    max_chain_depth: int = Field(default=100, ge=1)
    instance_from_path: bool = False
    log_server_errors: bool = True
    correlation_id_header: str = "X-Correlation-Id"

    model_config = SettingsConfigDict(env_prefix="PROBLEMDETAILS_", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
