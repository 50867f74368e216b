"""PixelRelay Image Generator — FastAPI Application.

This module defines the application factory, the relay routes, and the
``main()`` CLI function that launches the uvicorn server.

Architecture
------------
The application is a stateless relay:

- **Configuration** is a :class:`~pixelrelay.core.config.PixelRelayConfig`
  passed to :func:`create_app`; handlers never read the environment.
- **Image generation** is delegated to
  :class:`~pixelrelay.core.provider.FalImageProvider`, created in the
  lifespan and wrapped by :class:`~pixelrelay.api.relay.GenerationRelay`.
- **The UI** is the Gradio client from :mod:`pixelrelay.ui.app`, mounted at
  ``/`` on the same server.

Endpoints
---------
========  ====================  ====================================
Method    Path                  Purpose
========  ====================  ====================================
POST      ``/api/generate``     Generate a batch of four images
GET       ``/api/health``       Liveness check (no provider call)
GET       ``/``                 Gradio client
========  ====================  ====================================

Usage
-----
CLI (installed entry point)::

    pixelrelay

Direct invocation::

    python -m pixelrelay.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from pixelrelay import __version__
from pixelrelay.api.models import ErrorResponse
from pixelrelay.api.relay import GenerationRelay, ImageProvider
from pixelrelay.core.config import PixelRelayConfig, config
from pixelrelay.core.errors import PixelRelayError
from pixelrelay.core.provider import FalImageProvider

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@router.post("/api/generate")
async def generate_images(request: Request) -> JSONResponse:
    """Generate a batch of images for the prompt in the request body.

    This endpoint:

    1. Reads the raw body and extracts ``prompt`` (no content validation).
    2. Calls the provider once with the fixed parameter bundle.
    3. Maps the provider images to ``{imageUrl, width, height}``.

    Every failure, whatever its cause, is logged with its error kind and
    answered with HTTP 500 and ``{"error": "Failed to generate image"}``.

    Args:
        request: The incoming request.

    Returns:
        ``{"images": [...], "seed": int}`` on success, otherwise the error
        body with status 500.
    """
    relay: GenerationRelay = request.app.state.relay

    try:
        body = await request.body()
        result = await relay.handle(body)
    except PixelRelayError as e:
        logger.error(f"Error generating image ({type(e).__name__}): {e}", exc_info=True)
        return JSONResponse(status_code=500, content=ErrorResponse().model_dump())
    except Exception:
        logger.exception("Unexpected error generating image")
        return JSONResponse(status_code=500, content=ErrorResponse().model_dump())

    return JSONResponse(content=result.model_dump(by_alias=True))


@router.get("/api/health")
async def health() -> dict:
    """Return a liveness payload without contacting the provider."""
    return {"status": "ok", "version": __version__}


# ---------------------------------------------------------------------------
# Application factory.
# ---------------------------------------------------------------------------


def create_app(
    settings: PixelRelayConfig,
    provider: ImageProvider | None = None,
    mount_ui: bool = True,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Configuration injected into the provider and the UI.
        provider: Optional provider to use instead of a
            :class:`FalImageProvider` built from *settings*. An injected
            provider is not closed on shutdown.
        mount_ui: Mount the Gradio client at ``/``.

    Returns:
        The configured application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Create the provider client on startup and close it on shutdown."""
        owned = None
        if provider is None:
            owned = FalImageProvider(settings)
        app.state.relay = GenerationRelay(provider or owned)
        logger.info(f"Relay ready (model: {settings.provider_model})")

        yield

        if owned is not None:
            await owned.aclose()
            logger.info("Provider client closed on shutdown.")

    app = FastAPI(
        title="PixelRelay Image Generator",
        description="Prompt-to-image relay for a hosted diffusion model.",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(router)

    if mount_ui:
        import gradio as gr

        from pixelrelay.ui.app import create_ui

        blocks = create_ui(settings)
        app = gr.mount_gradio_app(app, blocks, path="/")

    return app


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Host and port come from :data:`~pixelrelay.core.config.config`
    (``PIXELRELAY_SERVER_HOST`` / ``PIXELRELAY_SERVER_PORT``), defaulting to
    ``0.0.0.0:7860``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(f"Starting PixelRelay Image Generator {__version__}")

    uvicorn.run(
        create_app(config),
        host=config.server_host,
        port=config.server_port,
    )


if __name__ == "__main__":
    main()
