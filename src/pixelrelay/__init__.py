"""PixelRelay Image Generator - prompt-to-image relay for hosted diffusion models."""

__version__ = "0.1.0"

from pixelrelay.core.config import PixelRelayConfig, config

__all__ = [
    "PixelRelayConfig",
    "config",
]
