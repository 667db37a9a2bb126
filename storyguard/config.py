from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "Storyguard"
    debug: bool = False

    # Scrubbing placeholders
    default_placeholder: str = "the client"
    domain_placeholder: str = "[client-domain]"

    # Leakage detection
    max_leaked_terms: int = 10

    # Publish validation thresholds
    min_title_length: int = 3
    min_body_characters: int = 40
    min_body_words: int = 8

    model_config = ConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
