# app/config.py
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    # Core
    APP_NAME: str = "json-cart-store"
    LOG_LEVEL: str = "INFO"

    # Collection files, fixed for the lifetime of the app
    PRODUCTS_PATH: Path = Path("data/products.json")
    CARTS_PATH: Path = Path("data/carts.json")

    # Reject cart line items that point at unknown products
    VERIFY_CART_PRODUCTS: bool = False

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8085

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
