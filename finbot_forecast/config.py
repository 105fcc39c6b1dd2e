"""Configuration management using Pydantic Settings"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./finbot.db"

    # Finance store: "sql" reads the database directly, "http" reads the finance tracker API
    store_backend: Literal["sql", "http"] = "sql"
    finance_api_base: str = "http://localhost:5000"

    # Service
    service_name: str = "finbot-forecast"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Scenario analysis
    enable_scenarios: bool = True
    default_currency: str = "TRY"
    history_window_months: int = 6


settings = Settings()
