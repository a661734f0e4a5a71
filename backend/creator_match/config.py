from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache


DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "creators.json"


class Settings(BaseSettings):
    app_name: str = "Creator Match"
    creators_data_path: str = str(DEFAULT_DATA_PATH)

    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # Match scoring
    engagement_rate_ceiling: float = 15.0
    follower_ceiling: int = 2_000_000
    neutral_match_score: int = 50

    class Config:
        env_file = ".env"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
