"""
Configuration for the AI Search Stream service.

Central place to configure:
- Gemini credential and model
- Upstream chunk timeout
- Backend base URL (used by the stream client)
- Log level
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Credential for the generative-search provider (GEMINI_API_KEY).
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-3-flash-preview"

    # Maximum wait for the next upstream chunk, in seconds.
    chunk_timeout_seconds: float = 60.0

    # Base URL where the FastAPI app is running.
    api_base_url: str = "http://localhost:8000"
    search_stream_path: str = "/search/stream"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
