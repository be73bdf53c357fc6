from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

HN_BASE_URL = "https://hacker-news.firebaseio.com/v0"

MAX_BEST_STORIES = 500
RAW_STORY_LIMIT = 10


class Settings(BaseSettings):
    base_url: str = Field(HN_BASE_URL, description="Hacker News API root, without trailing slash.")
    best_ids_ttl_seconds: int = 15 * 60
    story_ttl_seconds: int = 60 * 60
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    model_config = SettingsConfigDict(
        env_prefix="HN_",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
