from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Optional

from dotenv import load_dotenv


load_dotenv()

PLACEHOLDER_API_KEY = "your_openrouter_api_key_here"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here. Keyword overrides
    replace individual values, which is how tests build isolated apps.
    """

    app_env: str = os.getenv("APP_ENV", "development")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    openrouter_api_key: Optional[str] = os.getenv("OPENROUTER_API_KEY")
    openrouter_base_url: str = os.getenv(
        "OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1"
    )
    public_app_url: str = os.getenv(
        "PUBLIC_APP_URL", "https://weather-gpt-app.vercel.app"
    )
    app_title: str = "Weather GPT App"

    weather_model: str = os.getenv("WEATHER_MODEL", "openai/chatgpt-4o-latest")
    weather_max_tokens: int = 700
    weather_temperature: float = 0.3
    weather_timeout: float = 30.0
    weather_cache_ttl: float = float(os.getenv("WEATHER_CACHE_TTL_SECONDS", "900"))

    suggest_model: str = os.getenv("SUGGEST_MODEL", "openai/gpt-4.1-nano")
    suggest_max_tokens: int = 150
    suggest_temperature: float = 0.0
    suggest_timeout: float = 5.0
    suggest_cache_ttl: float = float(os.getenv("SUGGEST_CACHE_TTL_SECONDS", "86400"))

    def __init__(self, **overrides: Any) -> None:
        for key, value in overrides.items():
            if not hasattr(type(self), key):
                raise AttributeError(f"Unknown setting: {key}")
            setattr(self, key, value)

    @property
    def has_api_key(self) -> bool:
        key = (self.openrouter_api_key or "").strip()
        return bool(key) and key != PLACEHOLDER_API_KEY

    @property
    def logging_level(self) -> str:
        """LOG_LEVEL as a logging level name; unknown values fall back to INFO."""
        level = (self.log_level or "").strip().upper()
        return level if level in LOG_LEVELS else "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
