"""Configuration management for Countrydex.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the COUNTRYDEX_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (COUNTRYDEX_* prefix)
2. .env file in the project root
3. Default values defined in CountrydexConfig

Example .env file:
    COUNTRYDEX_DATA_DIR=data
    COUNTRYDEX_UPLOADS_DIR=uploads
    COUNTRYDEX_SERVER_PORT=3000
    COUNTRYDEX_MAX_UPLOAD_BYTES=5242880

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from countrydex.core.config import config

    print(config.database_path)
    print(config.uploads_dir)

Directory Management
--------------------
The configuration automatically creates required directories on initialization:
- data_dir: For the SQLite database file
- uploads_dir: For uploaded country photos (the content directory)
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent

MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class CountrydexConfig(BaseSettings):
    """Main configuration for Countrydex.

    Values are loaded from environment variables with the COUNTRYDEX_ prefix,
    with fallback to defaults defined here.

    Attributes
    ----------
    Storage:
        data_dir : Path
            Directory holding the SQLite database
        database_name : str
            File name of the SQLite database inside data_dir
        uploads_dir : Path
            Content directory for uploaded images, served at /uploads

    Frontend:
        static_dir : Path
            Client bundle (JS/CSS), served at /static
        templates_dir : Path
            Directory containing index.html

    Uploads:
        max_upload_bytes : int
            Largest accepted image in bytes (5 MiB)
        allowed_extensions : list[str]
            Lower-case file suffixes accepted for images
        allowed_content_types : list[str]
            Declared MIME types accepted for images

    Server:
        server_host : str
            Bind address
        server_port : int
            Port (1024-65535)
        cors_origins : list[str]
            Origins allowed by the CORS middleware
        log_level : str
            Root logging level used by the CLI entry point
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="COUNTRYDEX_",
        case_sensitive=False,
    )

    # Storage
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the SQLite database",
    )
    database_name: str = Field(
        default="countries.db",
        description="SQLite database file name",
    )
    uploads_dir: Path = Field(
        default=Path("uploads"),
        description="Content directory for uploaded images",
    )

    # Frontend
    static_dir: Path = Field(
        default=PACKAGE_DIR / "static",
        description="Client bundle directory",
    )
    templates_dir: Path = Field(
        default=PACKAGE_DIR / "templates",
        description="Directory containing index.html",
    )

    # Uploads
    max_upload_bytes: int = Field(
        default=MAX_UPLOAD_BYTES,
        description="Maximum accepted image size in bytes",
        ge=1,
    )
    allowed_extensions: list[str] = Field(
        default=[".jpg", ".jpeg", ".png", ".gif", ".webp"],
        description="Accepted image file extensions",
    )
    allowed_content_types: list[str] = Field(
        default=["image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"],
        description="Accepted image MIME types",
    )

    # Server
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address",
    )
    server_port: int = Field(
        default=3000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed to call the API",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level for the server process",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create required directories.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.uploads_dir.mkdir(parents=True, exist_ok=True)

    @property
    def database_path(self) -> Path:
        """Full path of the SQLite database file."""
        return self.data_dir / self.database_name


# Global configuration instance, loaded from COUNTRYDEX_* variables and .env.
config = CountrydexConfig()
