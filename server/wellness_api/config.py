"""Application configuration loaded from environment variables."""
import os
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_prefix="MINDSCOPE_", env_file=".env", extra="ignore")

    # Database location
    data_path: str = os.getenv("DATA_PATH", os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
    database_name: str = "mindscope.db"

    @property
    def database_path(self) -> str:
        return os.path.join(self.data_path, self.database_name)

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 5000
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Analytics lookback used when a request does not pass ?days=
    default_lookback_days: int = 30


@lru_cache
def get_settings() -> Settings:
    return Settings()
