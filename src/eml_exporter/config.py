"""
Application configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application configuration from environment variables.

    All settings can be overridden via environment variables with the same name.
    Wire-format constants (line length, line terminator) are not configurable.
    """

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Message defaults
    default_charset: str = "UTF-8"
    default_encoding: str = "quoted-printable"  # "quoted-printable" | "base64" | "8bit"

    # Buffer pool
    buffer_pool_max_size: int = 32  # Free buffers kept for reuse

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


# Global settings instance
settings = Settings()
