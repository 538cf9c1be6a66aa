"""
Storefront API - Application Configuration
==========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Values are read from environment variables (or a `.env` file),
       coerced and range-checked, and exposed through the `settings` singleton.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at import time; `validate_required_for_production()` runs
       again during application startup.
"""

from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every value has a development default. Production deployments point
    FIRESTORE_PROJECT / FIRESTORE_CREDENTIALS_FILE at the real database and
    restrict CORS_ORIGINS to the storefront frontend.
    """

    # ── Document Store ────────────────────────────────────────────────────
    # "firestore" talks to Cloud Firestore (or the emulator when
    # FIRESTORE_EMULATOR_HOST is exported); "memory" serves SEED_FILE from
    # process memory for local development.
    store_backend: str = Field(default="firestore")

    # Empty project lets google-auth infer it from the environment
    firestore_project: str = Field(default="")
    firestore_database: str = Field(default="(default)")

    # Service-account JSON; empty means Application Default Credentials
    firestore_credentials_file: str = Field(default="")

    # JSON file shaped {"<collection>": {"<doc id>": {...fields}}}
    seed_file: str = Field(default="")

    categories_collection: str = Field(default="categories", min_length=1)
    products_collection: str = Field(default="products", min_length=1)

    @field_validator("store_backend")
    @classmethod
    def validate_store_backend(cls, v: str) -> str:
        """Only the two bundled store implementations are selectable."""
        valid_backends = {"firestore", "memory"}
        lower = v.lower()
        if lower not in valid_backends:
            raise ValueError(f"Invalid store_backend '{v}'. Must be one of: {valid_backends}")
        return lower

    # ── Listing Behaviour ─────────────────────────────────────────────────
    default_page_size: int = Field(default=10, ge=1, le=100)
    max_page_size: int = Field(default=100, ge=1, le=500)

    # Fuse-style threshold: 0.0 requires an exact match, 1.0 matches anything.
    # 0.3 tolerates a mistyped letter or two ("fone" → "iPhone").
    search_threshold: float = Field(default=0.3, ge=0.0, le=1.0)

    # Categories change rarely; 0 sends Cache-Control: no-cache instead
    categories_cache_seconds: int = Field(default=60, ge=0, le=86400)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated list of frontend origins
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into the list CORSMiddleware expects."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

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

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Checks that the files the selected backend depends on exist.
        When:  Called during app startup (lifespan).
        How:   Collects every problem and raises one ValueError listing them.
        """
        errors = []
        if self.default_page_size > self.max_page_size:
            errors.append(
                f"DEFAULT_PAGE_SIZE ({self.default_page_size}) exceeds "
                f"MAX_PAGE_SIZE ({self.max_page_size})"
            )
        if self.store_backend == "firestore":
            if self.firestore_credentials_file and not Path(self.firestore_credentials_file).is_file():
                errors.append(
                    f"FIRESTORE_CREDENTIALS_FILE '{self.firestore_credentials_file}' does not exist"
                )
        elif self.seed_file and not Path(self.seed_file).is_file():
            errors.append(f"SEED_FILE '{self.seed_file}' does not exist")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
