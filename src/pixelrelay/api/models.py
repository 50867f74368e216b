"""Pydantic request and response models for the relay API.

These models define the JSON contract of ``POST /api/generate``. Wire names
follow the browser-facing camelCase contract (``imageUrl``); Python code uses
snake_case attributes and serialises with ``by_alias=True``.

Models
------
GenerateRequest
    Payload for ``POST /api/generate``. Carries only the prompt.
GeneratedImage
    One image of a batch, reduced to URL and pixel dimensions.
GenerationResult
    Successful relay response: the ordered batch plus the provider seed.
ErrorResponse
    Failure response with a fixed, generic message.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

GENERATION_FAILED_MESSAGE = "Failed to generate image"


class GenerateRequest(BaseModel):
    """Request body for the ``POST /api/generate`` endpoint.

    No length or content validation is applied; an empty string is a valid
    prompt and is forwarded unchanged.

    Attributes:
        prompt: Text prompt forwarded verbatim to the provider.
    """

    model_config = ConfigDict(strict=True)

    prompt: str = Field(
        ...,
        description="Prompt text forwarded verbatim to the provider.",
    )


class GeneratedImage(BaseModel):
    """A single generated image as exposed to the client.

    Attributes:
        image_url: Provider-hosted URL of the image (``imageUrl`` on the wire).
        width: Image width in pixels.
        height: Image height in pixels.
    """

    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(..., alias="imageUrl", description="Provider-hosted image URL.")
    width: int = Field(..., description="Image width in pixels.")
    height: int = Field(..., description="Image height in pixels.")

    @classmethod
    def from_provider(cls, record: dict[str, Any]) -> GeneratedImage:
        """Build from a provider image record (``url``, ``width``, ``height``)."""
        return cls(image_url=record["url"], width=record["width"], height=record["height"])


class GenerationResult(BaseModel):
    """Successful response of ``POST /api/generate``.

    Attributes:
        images: Images in provider order.
        seed: Seed reported by the provider for the batch.
    """

    images: list[GeneratedImage] = Field(default_factory=list)
    seed: int = Field(..., description="Seed reported by the provider.")


class ErrorResponse(BaseModel):
    """Failure response of ``POST /api/generate``.

    Attributes:
        error: Human-readable message. Never carries the underlying cause.
    """

    error: str = Field(default=GENERATION_FAILED_MESSAGE)
