"""Application configuration loaded from environment variables."""
import os
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database path
    data_path: str = os.getenv("DATA_PATH", os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
    database_name: str = "activity.db"

    @property
    def database_path(self) -> str:
        return os.path.join(self.data_path, self.database_name)

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 4000

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Goals used until the user saves their own
    default_step_goal: int = 10000
    default_calorie_goal: float = 500.0

    log_level: str = "INFO"

    class Config:
        env_prefix = "ACTIVITY_"


@lru_cache
def get_settings() -> Settings:
    return Settings()
