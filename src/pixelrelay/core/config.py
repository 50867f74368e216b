"""Configuration management for PixelRelay Image Generator.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the PIXELRELAY_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (PIXELRELAY_* prefix)
2. .env file in the project root
3. Default values defined in PixelRelayConfig

The provider credential is the one exception to the prefix rule: it is read
from ``PIXELRELAY_FAL_KEY`` or, failing that, the conventional ``FAL_KEY``.

Example .env file:
    FAL_KEY=0000-0000:abcdef
    PIXELRELAY_SERVER_PORT=7860
    PIXELRELAY_GALLERY_MAX_IMAGES=200

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
It is read once by the entry point and passed explicitly to
:func:`pixelrelay.api.main.create_app` and the provider client; request
handlers never consult the environment themselves.

Missing Credentials
-------------------
An absent ``FAL_KEY`` is not an error at startup. The key falls back to a
placeholder and the misconfiguration surfaces as a provider failure on the
first generation request.
"""

import tempfile
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_FAL_KEY = "your-fal-key"


class PixelRelayConfig(BaseSettings):
    """Main configuration for PixelRelay Image Generator.

    Attributes
    ----------
    Provider Settings:
        fal_key : str
            fal.ai API credential (placeholder when unset)
        provider_base_url : str
            Base URL of the fal synchronous run endpoint
        provider_model : str
            fal application path of the image model
        provider_timeout : float | None
            Seconds to wait for the provider; None disables the timeout

    Client Settings:
        relay_url : str | None
            Base URL the Gradio client uses to reach ``/api/generate``;
            None targets this server on loopback at ``server_port``
        client_timeout : float | None
            Seconds to wait for the relay and for image downloads
        downloads_dir : Path
            Directory where downloaded images are materialized
        gallery_max_images : int | None
            Optional cap on session gallery length (None = unbounded)

    Server Settings:
        server_host : str
            Bind address for uvicorn
        server_port : int
            Port for uvicorn (1024-65535)
        log_level : str
            Root logging level

    Examples
    --------
        >>> custom_config = PixelRelayConfig(
        ...     fal_key="test-key",
        ...     gallery_max_images=40,
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PIXELRELAY_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Provider settings
    fal_key: str = Field(
        default=PLACEHOLDER_FAL_KEY,
        validation_alias=AliasChoices("PIXELRELAY_FAL_KEY", "FAL_KEY", "fal_key"),
        description="fal.ai API key (placeholder tolerated, fails at call time)",
    )
    provider_base_url: str = Field(
        default="https://fal.run",
        description="Base URL for synchronous fal model runs",
    )
    provider_model: str = Field(
        default="fal-ai/flux-pro/v1.1",
        description="fal application path of the image model",
    )
    provider_timeout: float | None = Field(
        default=None,
        description="Provider request timeout in seconds (None = wait indefinitely)",
        gt=0,
    )

    # Client settings
    relay_url: str | None = Field(
        default=None,
        description="Base URL of the relay endpoint as seen by the UI (None = this server)",
    )
    client_timeout: float | None = Field(
        default=None,
        description="UI request timeout in seconds (None = wait indefinitely)",
        gt=0,
    )
    downloads_dir: Path = Field(
        default=Path(tempfile.gettempdir()) / "pixelrelay-downloads",
        description="Directory for images fetched by the download action",
    )
    gallery_max_images: int | None = Field(
        default=None,
        description="Maximum images kept in a session gallery (None = unbounded)",
        ge=1,
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level for the application",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create the downloads directory."""
        super().__init__(**kwargs)

        self.downloads_dir.mkdir(parents=True, exist_ok=True)

    @property
    def has_placeholder_key(self) -> bool:
        """True when no real provider credential was configured."""
        return not self.fal_key or self.fal_key == PLACEHOLDER_FAL_KEY

    @property
    def resolved_relay_url(self) -> str:
        """Relay base URL for the UI client, defaulting to this server."""
        if self.relay_url:
            return self.relay_url
        return f"http://127.0.0.1:{self.server_port}"


# Global configuration instance
# Loaded once from PIXELRELAY_* environment variables and .env at import time.
config = PixelRelayConfig()
