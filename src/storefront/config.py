"""Storefront settings, read from ``STOREFRONT_*`` environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from identity.shared.phone import DEFAULT_PHONE_PATTERN


class Settings(BaseSettings):
    """Application settings.

    ``api_url`` is the base of the product and order endpoints; ``cdn_url``
    is prefixed to product image paths for display.
    """

    api_url: str = "http://localhost:8000/api/weblarek"
    cdn_url: str = "http://localhost:8000/content/weblarek"
    request_timeout: float = 30.0

    # Contact validation
    phone_pattern: str = DEFAULT_PHONE_PATTERN
    strict_contact_format: bool = True

    # Display
    currency_label: str = "synapses"

    model_config = SettingsConfigDict(env_prefix="STOREFRONT_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
