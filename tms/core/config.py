"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables and .env file.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

INSECURE_DEFAULT_SECRET_KEY = "tms-super-secret-key-2024"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Application
    # =========================================================================
    app_name: str = "TMS"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 4000

    # =========================================================================
    # GraphQL
    # =========================================================================
    graphql_path: str = "/graphql"
    graphiql: bool = Field(
        default=True,
        description="Serve the GraphiQL explorer on GET requests to the GraphQL path",
    )

    # =========================================================================
    # Security & Authentication
    # =========================================================================
    secret_key: str = Field(
        default=INSECURE_DEFAULT_SECRET_KEY,
        description="Secret key for JWT signing (use openssl rand -hex 32)",
    )
    require_secret_key: bool = Field(
        default=False,
        description="Refuse to start while the built-in secret key is in use",
    )
    algorithm: str = "HS256"
    access_token_expire_days: int = 7

    # =========================================================================
    # Query defaults
    # =========================================================================
    default_page_size: int = Field(
        default=10,
        ge=1,
        description="Page size used when a query gives no (or a non-positive) limit",
    )

    # =========================================================================
    # Demo data
    # =========================================================================
    seed_shipment_count: int = Field(
        default=50,
        ge=0,
        description="Number of random shipments generated at startup",
    )
    seed_random_seed: Optional[int] = Field(
        default=None,
        description="Seed for the demo data generator (random when unset)",
    )

    @property
    def uses_insecure_secret_key(self) -> bool:
        return self.secret_key == INSECURE_DEFAULT_SECRET_KEY


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
