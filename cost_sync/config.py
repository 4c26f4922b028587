"""
Configuration management.
Simple .env based config for cron deployment.
"""

from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Shopify
    shopify_domain: str = ""  # e.g., "mystore.myshopify.com"
    shopify_access_token: str = Field(
        default="",
        validation_alias=AliasChoices("shopify_access_token", "shopify_key"),
    )
    shopify_api_version: str = "2025-07"

    # Finale
    finale_account: str = ""  # account path segment in the Finale URL
    finale_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("finale_api_key", "paylink_api_key"),
    )
    finale_api_secret: str = Field(
        default="",
        validation_alias=AliasChoices("finale_api_secret", "paylink_secret_id"),
    )
    finale_base_url: str = "https://app.finaleinventory.com"

    # Sync
    update_delay_seconds: float = 0.15
    staging_dir: str = "./data"

    # Logging
    log_level: str = "INFO"

    def missing_credentials(self) -> List[str]:
        """Names of required settings that are empty."""
        required = (
            "shopify_domain",
            "shopify_access_token",
            "finale_account",
            "finale_api_key",
            "finale_api_secret",
        )
        return [name for name in required if not getattr(self, name)]


# Global settings instance
settings = Settings()
