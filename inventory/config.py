"""
Product Inventory API: Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading, validated on import, so a
       misconfigured Lambda fails on cold start instead of mid-request.
How:   Pydantic Settings reads environment variables (or a .env file),
       validates types/ranges, and exposes a module-level `settings` object.
Who:   Imported by the store factory, the transports and Alembic.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Defaults target the production deployment: a DynamoDB table named
    `product-inventory` in us-east-1.
    """

    # ── Store Selection ───────────────────────────────────────────────────
    # What: Which ProductStore implementation backs the handlers
    # Values: "dynamodb" (production) or "sql" (local development)
    store_backend: str = Field(default="dynamodb")

    # ── DynamoDB ──────────────────────────────────────────────────────────
    table_name: str = Field(default="product-inventory", min_length=1)
    aws_region: str = Field(default="us-east-1")

    # What: Optional endpoint override, e.g. http://localhost:8000 for DynamoDB Local
    dynamodb_endpoint_url: Optional[str] = Field(default=None)

    # ── SQL Store ─────────────────────────────────────────────────────────
    # Format: any async SQLAlchemy URL (sqlite+aiosqlite, postgresql+asyncpg, ...)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./inventory.db",
        description="Async SQLAlchemy URL used when STORE_BACKEND=sql",
    )
    db_pool_pre_ping: bool = Field(default=True)

    # ── Scan Pagination ───────────────────────────────────────────────────
    # What: Items requested per scan page (DynamoDB `Limit`)
    # Unset: DynamoDB decides (1 MB per page); the SQL store uses its own default
    scan_page_size: Optional[int] = Field(default=None, ge=1, le=10_000)

    # What: Ceiling on pages fetched by one get-all call
    # Unset: unbounded, the collector runs until the store stops returning a cursor
    scan_max_pages: Optional[int] = Field(default=None, ge=1)

    # ── HTTP Transport ────────────────────────────────────────────────────
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # ── Logging ───────────────────────────────────────────────────────────
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("store_backend")
    @classmethod
    def validate_store_backend(cls, v: str) -> str:
        """Only the two shipped ProductStore implementations are selectable."""
        valid_backends = {"dynamodb", "sql"}
        lower = v.lower()
        if lower not in valid_backends:
            raise ValueError(
                f"Invalid store_backend '{v}'. Must be one of: {valid_backends}"
            )
        return lower

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # TABLE_NAME and table_name both work
    }


settings = Settings()
