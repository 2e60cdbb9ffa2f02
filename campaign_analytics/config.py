"""
Configuration management for the campaign analytics engine
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "Campaign Analytics Aggregation Engine"
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Client data endpoint (GET {base_url}/clients/{id}/data)
    client_data_base_url: str = "http://localhost:3000/api"
    client_data_api_token: Optional[str] = None
    client_data_timeout_seconds: float = 30.0
    client_data_max_attempts: int = 3
    client_data_retry_base_delay: float = 1.0  # seconds

    # Identity used when a load is requested without a client id.
    # Leave empty to skip the remote call for unscoped loads.
    session_client_id: Optional[str] = None

    # Monthly window
    base_month: str = "2025-08"  # YYYY-MM, the month real data is attributed to
    synthetic_months_enabled: bool = True
    synthetic_seed: Optional[int] = None  # Fixed seed = reproducible synthetic months

    # Fallback sample dataset for unscoped loads with no remote data
    fallback_enabled: bool = True

    # Warm the unscoped store when the API starts
    preload_on_startup: bool = True

    # Formatting
    display_currency: str = "CAD"

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
