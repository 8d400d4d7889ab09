"""
fontseca.dev Backend — Application Configuration
==================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by main.py, the middleware and the binding helpers.
When:  Loaded once at module import time.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Attributes are grouped by concern for readability.
    """

    # ── Server ────────────────────────────────────────────────────────────
    # "debug" enables the interactive API docs; "release" hides them
    server_mode: str = Field(default="debug")
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=5487, ge=1024, le=65535)

    @field_validator("server_mode")
    @classmethod
    def validate_server_mode(cls, v: str) -> str:
        valid_modes = {"debug", "release", "test"}
        lower = v.strip().lower() or "debug"
        if lower not in valid_modes:
            raise ValueError(f"Invalid server_mode '{v}'. Must be one of: {valid_modes}")
        return lower

    # ── Logging ───────────────────────────────────────────────────────────
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    # Errors are additionally appended to this file; empty disables it
    error_log_file: str = Field(default="")

    # Common Log Format access lines are additionally appended here
    access_log_file: str = Field(default="")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; empty disables the CORS middleware
    cors_origins: str = Field(default="")

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Request Bodies ────────────────────────────────────────────────────
    # Upper bound for JSON request bodies: 1MB = 1 << 20
    max_body_size: int = Field(default=1 << 20, ge=1024, le=16 << 20)

    # ── Problem Details ───────────────────────────────────────────────────
    # Base URL that relative problem types resolve against; empty → about:blank
    problem_base_url: str = Field(default="")
    # Resolve relative types as URL fragments ("base#type") instead of paths
    problem_fragment: bool = Field(default=False)
    # Added as the "contact" member of internal server error problems
    problem_contact: str = Field(default="mailto:fontseca.dev@outlook.com")

    # ── Services ──────────────────────────────────────────────────────────
    # Dotted "module:callable" returning a fontseca.services.Services bundle
    services_factory: str = Field(default="")

    @field_validator("services_factory")
    @classmethod
    def validate_services_factory(cls, v: str) -> str:
        v = v.strip()
        if v and v.count(":") != 1:
            raise ValueError(
                f"Invalid services_factory '{v}'. Expected the form 'package.module:callable'"
            )
        return v

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


settings = Settings()
