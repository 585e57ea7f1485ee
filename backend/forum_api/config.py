"""
Forum Comments API: Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every setting has a default matching the docker-compose deployment,
    where the store is reachable under the `mongo` host name.
    """

    # ── Document Store ────────────────────────────────────────────────────
    # Format: mongodb://[user:password@]host:port
    mongo_uri: str = Field(
        default="mongodb://mongo:27017",
        description="MongoDB connection string",
    )
    mongo_database: str = Field(default="forum", min_length=1)

    # The collection name doubles as the resource path (/comments)
    mongo_collection: str = Field(default="comments", min_length=1)

    # How long the driver waits for a usable server before failing an operation
    mongo_server_selection_timeout_ms: int = Field(default=5000, ge=100, le=60000)

    # Upper bound on pooled sockets shared by all concurrent requests
    mongo_max_pool_size: int = Field(default=100, ge=1, le=1000)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; "*" allows every origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=1313, ge=1, le=65535)

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

    # ── Input Handling ────────────────────────────────────────────────────
    # False: malformed JSON and unknown/invalid ids yield empty results (legacy clients)
    # True:  they yield 400/404 error responses
    strict_validation: bool = Field(default=False)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


settings = Settings()
