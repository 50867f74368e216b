"""HTTP client used by the UI to reach the relay and fetch images."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from pixelrelay.api.models import ErrorResponse, GenerationResult
from pixelrelay.core.errors import ClientNetworkError, DownloadError

logger = logging.getLogger(__name__)


class RelayClient:
    """Synchronous client for ``POST /api/generate`` and image downloads.

    Args:
        base_url: Base URL of the relay (e.g. ``http://127.0.0.1:7860``).
        timeout: Request timeout in seconds, or None to wait indefinitely.
        transport: Optional httpx transport (used by tests).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
            follow_redirects=True,
        )

    def generate(self, prompt: str) -> GenerationResult | ErrorResponse:
        """Ask the relay for a batch.

        The reply is interpreted by its body, not its status: any body with
        an ``error`` field is an :class:`ErrorResponse`.

        Raises:
            ClientNetworkError: If the relay is unreachable or the body is not
                a JSON result.
        """
        try:
            response = self._client.post("/api/generate", json={"prompt": prompt})
            data = response.json()
        except httpx.HTTPError as e:
            raise ClientNetworkError(f"Relay request failed: {e}") from e
        except ValueError as e:
            raise ClientNetworkError("Relay returned a non-JSON body") from e

        if isinstance(data, dict) and data.get("error"):
            return ErrorResponse(error=str(data["error"]))

        try:
            return GenerationResult.model_validate(data)
        except ValidationError as e:
            raise ClientNetworkError(f"Relay returned an unexpected body: {e}") from e

    def fetch_image(self, url: str) -> bytes:
        """Download the raw bytes behind an image URL.

        Raises:
            DownloadError: On transport failure or a non-2xx status.
        """
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise DownloadError(f"Image fetch failed: {e}") from e
        return response.content

    def close(self) -> None:
        self._client.close()
