"""Relay between the HTTP surface and the image-generation provider.

:class:`GenerationRelay` turns a raw request body into one provider call and
normalises the provider payload into a :class:`GenerationResult`. It raises
the typed errors from :mod:`pixelrelay.core.errors`; collapsing them into the
generic HTTP 500 is the route handler's job.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

from pydantic import ValidationError

from pixelrelay.api.models import GeneratedImage, GenerateRequest, GenerationResult
from pixelrelay.core.errors import BodyParseError, EmptyResponse, ProviderError

logger = logging.getLogger(__name__)


class ImageProvider(Protocol):
    """Anything that can run one generation call for a prompt."""

    async def run(self, prompt: str) -> dict[str, Any] | None: ...


def parse_generate_request(body: bytes) -> GenerateRequest:
    """Decode a raw request body into a :class:`GenerateRequest`.

    Args:
        body: Raw HTTP request body.

    Returns:
        The parsed request.

    Raises:
        BodyParseError: If the body is not JSON, not an object, or lacks a
            string ``prompt``.
    """
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        raise BodyParseError(f"Request body is not valid JSON: {e}") from e

    try:
        return GenerateRequest.model_validate(data)
    except ValidationError as e:
        raise BodyParseError(f"Request body has no string prompt: {e.error_count()} error(s)") from e


def map_provider_payload(payload: dict[str, Any]) -> GenerationResult:
    """Reduce a provider payload to the relay's response contract.

    Image order is preserved. Provider fields other than ``url``, ``width``,
    ``height`` and ``seed`` are dropped.

    Raises:
        ProviderError: If the payload is missing required fields.
    """
    try:
        images = [GeneratedImage.from_provider(record) for record in payload["images"]]
        return GenerationResult(images=images, seed=payload["seed"])
    except (KeyError, TypeError, ValidationError) as e:
        raise ProviderError(f"Provider payload is malformed: {e!r}") from e


class GenerationRelay:
    """One request in, one provider call out.

    Args:
        provider: The provider client, injected at construction time.
    """

    def __init__(self, provider: ImageProvider) -> None:
        self.provider = provider

    async def generate(self, prompt: str) -> GenerationResult:
        """Generate a batch for *prompt*.

        Raises:
            EmptyResponse: If the provider returned no payload.
            ProviderError: If the provider call failed or its payload is
                malformed.
        """
        payload = await self.provider.run(prompt)
        if not payload:
            raise EmptyResponse("No data received from the provider")

        result = map_provider_payload(payload)
        logger.info(f"Provider returned {len(result.images)} image(s) with seed {result.seed}")
        return result

    async def handle(self, body: bytes) -> GenerationResult:
        """Parse a raw request body and generate a batch for its prompt."""
        request = parse_generate_request(body)
        return await self.generate(request.prompt)
