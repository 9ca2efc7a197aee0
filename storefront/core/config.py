"""Storefront Configuration"""

from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Storefront"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8080

    # Shop backend (catalog + payment preference)
    shop_api_base_url: str = "http://localhost:8000"
    catalog_path: str = "/productos/tienda"
    preference_path: str = "/mercadopago/preferencia"
    request_timeout: float = 30.0

    # Display
    image_url_template: str = "https://picsum.photos/400?{id}"

    # Notification auto-dismiss delays (seconds)
    catalog_notification_seconds: float = 1.0
    checkout_notification_seconds: float = 3.0

    # Views idle for longer than this are closed when a new one opens
    session_max_idle_seconds: float = 3600.0

    # Cart hand-off storage; in-memory when unset
    handoff_store_path: Optional[str] = None

    class Config:
        env_file = "config/.env"
        env_file_encoding = "utf-8"
        env_prefix = "STOREFRONT_"
        case_sensitive = False

    def image_url_for(self, product_id: int) -> str:
        """Display image URL derived from the product id"""
        return self.image_url_template.format(id=product_id)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
