"""Core functionality shared by the relay and the UI.

- **PixelRelayConfig**: Configuration management using Pydantic Settings
- **config**: Global configuration instance (loads from environment variables)
- **FalImageProvider**: Async client for the hosted image-generation service
- **errors**: Exception hierarchy used across the relay and the client

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration using Pydantic Settings
   - Settings prefixed with PIXELRELAY_ in .env files (plus FAL_KEY)

2. **Provider Layer** (provider.py):
   - One POST per prompt to the fal run endpoint
   - Fixed parameter bundle: landscape 4:3, 4 images, safety checker, JPEG

3. **Errors** (errors.py):
   - Server-side kinds collapsed into one HTTP 500 by the relay
   - Client-side kinds turned into generic UI messages
"""

from pixelrelay.core.config import PixelRelayConfig, config
from pixelrelay.core.errors import (
    BodyParseError,
    ClientNetworkError,
    DownloadError,
    EmptyResponse,
    PixelRelayError,
    ProviderError,
)
from pixelrelay.core.provider import GENERATION_PARAMETERS, FalImageProvider

__all__ = [
    "BodyParseError",
    "ClientNetworkError",
    "DownloadError",
    "EmptyResponse",
    "FalImageProvider",
    "GENERATION_PARAMETERS",
    "PixelRelayConfig",
    "PixelRelayError",
    "ProviderError",
    "config",
]
