"""Client for the hosted image-generation provider (fal.ai).

This module provides :class:`FalImageProvider`, the only component that talks
to the provider. Every call sends the prompt together with a fixed parameter
bundle (:data:`GENERATION_PARAMETERS`); callers cannot change image size,
batch size, safety settings, or output format.

The provider is treated as a plain request/response service. The synchronous
``https://fal.run/<model>`` endpoint holds the connection open until the batch
is ready, so one awaited POST covers queueing and inference.

Usage
-----
::

    from pixelrelay.core.config import config
    from pixelrelay.core.provider import FalImageProvider

    provider = FalImageProvider(config)
    payload = await provider.run("a red fox in snow")
    await provider.aclose()
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from pixelrelay.core.config import PixelRelayConfig
from pixelrelay.core.errors import ProviderError

logger = logging.getLogger(__name__)

# Fixed request shape sent with every prompt.
GENERATION_PARAMETERS: dict[str, Any] = {
    "image_size": "landscape_4_3",
    "num_images": 4,
    "enable_safety_checker": True,
    "safety_tolerance": "2",
    "output_format": "jpeg",
}


class FalImageProvider:
    """Async wrapper around the fal synchronous run endpoint.

    Args:
        config: Application configuration supplying the credential, base
            URL, model path, and timeout.
        client: Optional pre-built ``httpx.AsyncClient``. When omitted, the
            provider creates and owns one; :meth:`aclose` only closes clients
            the provider owns.
    """

    def __init__(
        self,
        config: PixelRelayConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.model = config.provider_model
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=config.provider_base_url,
            timeout=httpx.Timeout(config.provider_timeout),
        )
        self._headers = {
            "Authorization": f"Key {config.fal_key}",
            "Content-Type": "application/json",
        }

        if config.has_placeholder_key:
            logger.warning("FAL_KEY is not set; provider calls will fail until it is configured")

    def build_payload(self, prompt: str) -> dict[str, Any]:
        """Return the JSON body for a generation call."""
        return {"prompt": prompt, **GENERATION_PARAMETERS}

    async def run(self, prompt: str) -> dict[str, Any] | None:
        """Run one generation call and return the provider payload.

        Args:
            prompt: Prompt text, forwarded verbatim.

        Returns:
            The decoded JSON payload, or ``None`` if the provider answered
            with an empty body or an empty JSON value.

        Raises:
            ProviderError: On transport failure, a non-2xx status, or a body
                that is not JSON.
        """
        logger.info(f"Submitting prompt to {self.model} ({len(prompt)} chars)")

        try:
            response = await self._client.post(
                f"/{self.model}",
                headers=self._headers,
                json=self.build_payload(prompt),
            )
        except httpx.HTTPError as e:
            raise ProviderError(f"Provider request failed: {e}") from e

        if response.is_error:
            raise ProviderError(
                f"Provider returned HTTP {response.status_code}: {response.text[:500]}",
                status_code=response.status_code,
            )

        if not response.content:
            return None

        try:
            payload = response.json()
        except ValueError as e:
            raise ProviderError("Provider returned a non-JSON body") from e

        return payload or None

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this provider created it."""
        if self._owns_client:
            await self._client.aclose()
