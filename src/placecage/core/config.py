"""Configuration management for the Placecage image server.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the PLACECAGE_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (PLACECAGE_* prefix)
2. .env file in the project root
3. Default values defined in PlacecageConfig

Example .env file:
    PLACECAGE_IMAGES_DIR=/srv/placecage/images
    PLACECAGE_JPEG_QUALITY=80
    PLACECAGE_SERVER_HOST=0.0.0.0
    PLACECAGE_SERVER_PORT=8080

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
The image server reads its base directory from it once at startup instead of
consulting the process working directory on every request.

Usage Example
-------------
    from placecage.core.config import config

    print(config.images_dir)
    print(config.server_port)

Directory Layout
----------------
``images_dir`` holds two trees:
- source/<subject>/<kind>/<N>.jpg: catalog photos, populated externally
- _gen/<subject>/<kind>/<W>x<H>.jpg: resized outputs, created on demand
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PlacecageConfig(BaseSettings):
    """Main configuration for the Placecage image server.

    Attributes
    ----------
    Paths:
        images_dir : Path
            Base directory containing ``source/`` and ``_gen/``. Relative
            values are resolved to an absolute path when the config loads.

    Output Settings:
        jpeg_quality : int
            JPEG quality used when encoding generated images (1-95)

    Server Settings:
        server_host : str
            Bind address for uvicorn
        server_port : int
            Bind port for uvicorn (1-65535)
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
            Root logging level applied by the CLI entry point

    Examples
    --------
    Create a custom configuration:

        >>> custom_config = PlacecageConfig(images_dir="/tmp/images", jpeg_quality=90)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PLACECAGE_",
        case_sensitive=False,
    )

    # Paths
    images_dir: Path = Field(
        default=Path("images"),
        description="Base directory holding source/ and _gen/ image trees",
    )

    # Output settings
    jpeg_quality: int = Field(
        default=75,
        description="JPEG quality for generated images",
        ge=1,
        le=95,
    )

    # Server settings
    server_host: str = Field(
        default="127.0.0.1",
        description="Server bind address",
    )
    server_port: int = Field(
        default=8080,
        description="Server port",
        ge=1,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level for the server process",
    )

    @field_validator("images_dir")
    @classmethod
    def _resolve_images_dir(cls, value: Path) -> Path:
        # Pin the base directory once so later chdir calls cannot move the cache.
        return value.expanduser().resolve()


# Global configuration instance
# Loads values from environment variables (PLACECAGE_* prefix) and .env file.
config = PlacecageConfig()
