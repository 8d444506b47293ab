"""Storefront Configuration"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Storefront"
    debug: bool = False

    # Backend API
    api_base_url: str = "http://localhost:8001/api/"
    request_timeout: float = 30.0

    # Pricing
    tax_rate: float = 0.07
    currency_symbol: str = "$"
    money_places: int = 2
    default_intensity: int = 5

    # Client-side persistence
    cart_storage_key: str = "cart"
    storage_dir: Optional[str] = None

    # Deal countdown polling, in seconds
    deal_poll_interval: float = 1.0

    # Mock backend
    mock_host: str = "0.0.0.0"
    mock_port: int = 8001

    @property
    def persistent_storage_configured(self) -> bool:
        """Check if a storage directory is configured"""
        return bool(self.storage_dir)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
