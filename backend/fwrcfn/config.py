"""
FWRCFN Backend — Application Configuration
============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Values come from environment variables (or a .env file), are validated
       on load, and are exposed through the `settings` singleton.
Who:   Imported by every module that needs configuration values.

Environment variables keep the names the deployment already uses:
MONGODB_URI, JWT_SECRET and PORT.
"""

import logging
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEV_JWT_SECRET = "fwrcfn_jwt_secret_2024"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Production deployments must
    override JWT_SECRET and MONGODB_URI.
    """

    # ── MongoDB ───────────────────────────────────────────────────────────
    # Format: mongodb://[user:pass@]host:port/dbname
    # The database name in the URI path wins over mongo_default_db.
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017/fwrcfn",
        description="MongoDB connection string",
    )
    mongo_default_db: str = Field(default="fwrcfn")

    # How long the startup ping waits for a reachable server before the
    # connection is reported as down.
    mongo_server_selection_timeout_ms: int = Field(default=5000, ge=100, le=60000)

    # ── Tokens ────────────────────────────────────────────────────────────
    jwt_secret: str = Field(
        default=DEV_JWT_SECRET,
        description="Shared secret used to sign session tokens",
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_expires_days: int = Field(default=7, ge=1, le=365)

    # ── Password hashing ──────────────────────────────────────────────────
    # bcrypt cost factor; each +1 doubles hashing time.
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; "*" allows every origin.
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    port: int = Field(default=5050, ge=1, le=65535)

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

    @field_validator("jwt_algorithm")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        """Only HMAC algorithms make sense with a shared secret."""
        upper = v.upper()
        if upper not in {"HS256", "HS384", "HS512"}:
            raise ValueError(f"Unsupported jwt_algorithm '{v}'. Use HS256, HS384 or HS512.")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def warn_insecure_defaults(self) -> None:
        """
        Logs a warning for settings still holding development values.

        Called during startup. Never raises: the server keeps running with
        development defaults so that local setups work out of the box.
        """
        if self.jwt_secret == DEV_JWT_SECRET:
            logger.warning(
                "JWT_SECRET is using the development default. "
                "Set JWT_SECRET before deploying."
            )


# Singleton instance imported throughout the application
settings = Settings()
