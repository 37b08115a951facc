"""Configuration management for the Visions gallery.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the VISIONS_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (VISIONS_* prefix)
2. .env file in the project root
3. Default values defined in GalleryConfig

Example .env file:
    VISIONS_DATABASE_PATH=data/gallery.db
    VISIONS_SERVER_PORT=3000
    VISIONS_API_BASE_URL=http://localhost:3000
    VISIONS_STRICT_NOT_FOUND=false

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
Entry points read from it; the API application factory and the UI accept an
explicit instance so tests can build isolated configurations.

Usage Example
-------------
    from visions_gallery.core.config import config

    print(config.database_path)
    print(config.api_base_url)
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

IN_MEMORY_DATABASE = ":memory:"


class GalleryConfig(BaseSettings):
    """Main configuration for the Visions gallery.

    Values are loaded from environment variables with the VISIONS_ prefix,
    with fallback to defaults defined here.

    Attributes
    ----------
    Store Settings:
        database_path : Path
            SQLite database file holding the image records. ``:memory:``
            selects a private in-memory database.

    API Settings:
        server_host : str
            Bind address for the API server
        server_port : int
            Port for the API server (1024-65535)
        cors_origins : list[str]
            Origins allowed to call the API from a browser
        strict_not_found : bool
            Report update/delete of an unknown id as 404 instead of success

    Client Settings:
        api_base_url : str
            Base URL the UI uses to reach the API
        request_timeout : float
            Timeout in seconds for each API request made by the UI

    UI Settings:
        gradio_server_name : str
            Server bind address (0.0.0.0 for local network)
        gradio_server_port : int
            Server port (1024-65535)
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)

    Logging:
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
            Root log level used by the entry points

    Notes
    -----
    - The database parent directory is created automatically
    - To modify config, set environment variables and restart the application
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VISIONS_",
        case_sensitive=False,
    )

    # Store
    database_path: Path = Field(
        default=Path("data/gallery.db"),
        description="SQLite database file for image records (':memory:' for in-memory)",
    )

    # API server
    server_host: str = Field(
        default="0.0.0.0",
        description="API server bind address",
    )
    server_port: int = Field(
        default=3000,
        description="API server port",
        ge=1024,
        le=65535,
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed by the CORS middleware",
    )
    strict_not_found: bool = Field(
        default=False,
        description="Return 404 when update/delete target an unknown image id",
    )

    # Client
    api_base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the gallery API used by the UI",
    )
    request_timeout: float = Field(
        default=10.0,
        description="Per-request timeout in seconds for UI calls to the API",
        gt=0,
    )

    # UI settings
    gradio_server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    gradio_server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level for the entry points",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create the database directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        if not self.uses_memory_database:
            self.database_path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def uses_memory_database(self) -> bool:
        """True when the store should live in memory only."""
        return str(self.database_path) == IN_MEMORY_DATABASE


# Global configuration instance
# Loaded from environment variables (VISIONS_* prefix) and .env file.
config = GalleryConfig()
