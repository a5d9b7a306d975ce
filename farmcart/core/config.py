"""Cart Configuration"""

import os
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_prefix="FARMCART_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Farm Cart Records"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8001
    log_level: str = "INFO"

    # Cart record service
    api_base_url: str = "http://localhost:8001"
    api_key: Optional[str] = None
    request_timeout: float = 30.0

    # Sync behaviour
    sync_debounce_seconds: float = 1.0

    # Device storage
    cart_storage_key: str = "amos-miller-farm-cart"
    fulfillment_storage_key: str = "amos-miller-farm-fulfillment"
    storage_path: str = os.path.join(os.path.expanduser("~"), ".farmcart", "storage.json")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
