"""Configuration for the Widgetboard service."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Widgetboard configuration.

    All settings can be overridden via environment variables or a .env file.
    """

    # Service
    SERVICE_NAME: str = Field(default="widgetboard")
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=5000, ge=1, le=65535)
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )
    LOG_JSON: bool = Field(default=False)
    CORS_ORIGINS: str = Field(default="*")

    # Identity: every request acts as this user
    DEFAULT_USER_ID: str = Field(default="default-user", min_length=1)

    # Storage
    STORE_BACKEND: Literal["memory", "sql"] = Field(default="memory")
    DATABASE_URL: str = Field(default="sqlite:///./widgetboard.db")
    SEED_SAMPLE_DATA: bool = Field(default=True)

    # Upstream proxies
    QUOTE_API_URL: str = Field(
        default="https://api.quotable.io/random?minLength=50&maxLength=150"
        "&tags=wisdom,motivational,inspirational"
    )
    WEATHER_API_URL: str = Field(
        default="https://api.openweathermap.org/data/2.5/weather"
    )
    OPENWEATHER_API_KEY: str = Field(default="")
    WEATHER_API_KEY: str = Field(default="")
    HTTP_TIMEOUT_SECONDS: float = Field(default=5.0, gt=0)

    # Collaborators
    BRAINSTORM_BACKEND: Literal["canned", "ollama"] = Field(default="canned")
    OLLAMA_MODEL: str = Field(default="llama3.2")
    SEARCH_BACKEND: Literal["stub", "duckduckgo"] = Field(default="stub")
    SEARCH_MAX_RESULTS: int = Field(default=5, ge=1, le=25)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def weather_api_key(self) -> str:
        """OpenWeather key, accepting either variable name."""
        return self.OPENWEATHER_API_KEY or self.WEATHER_API_KEY


settings = Settings()
