"""Shared pytest fixtures for PixelRelay tests."""

import io
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from pixelrelay.api.main import create_app
from pixelrelay.core.config import PixelRelayConfig
from pixelrelay.ui.models import UIState


class FakeProvider:
    """Stand-in for FalImageProvider that records prompts.

    Returns *payload* from ``run`` or raises *error* when given.
    """

    def __init__(self, payload=None, error: Exception | None = None):
        self.payload = payload
        self.error = error
        self.prompts: list[str] = []

    async def run(self, prompt: str):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.payload


def make_provider_payload(seed: int = 12345, count: int = 4) -> dict:
    """Build a provider payload shaped like a fal flux-pro response."""
    return {
        "images": [
            {
                "url": f"https://fal.media/files/fox/{i}.jpeg",
                "width": 1024,
                "height": 768,
                "content_type": "image/jpeg",
            }
            for i in range(count)
        ],
        "timings": {"inference": 3.2},
        "seed": seed,
        "has_nsfw_concepts": [False] * count,
        "prompt": "a red fox in snow",
    }


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> PixelRelayConfig:
    """Create a test configuration that ignores .env and uses temp paths."""
    return PixelRelayConfig(
        _env_file=None,
        fal_key="test-key",
        downloads_dir=str(temp_dir / "downloads"),
        relay_url="http://relay.test",
    )


@pytest.fixture
def provider_payload() -> dict:
    """Four-image provider payload with seed 12345."""
    return make_provider_payload()


@pytest.fixture
def fake_provider(provider_payload: dict) -> FakeProvider:
    """Provider that answers every prompt with ``provider_payload``."""
    return FakeProvider(payload=provider_payload)


@pytest.fixture
def test_client(test_config: PixelRelayConfig, fake_provider: FakeProvider):
    """FastAPI TestClient for the relay (UI not mounted), lifespan active."""
    app = create_app(test_config, provider=fake_provider, mount_ui=False)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def ui_state() -> UIState:
    """Create empty UI state for testing."""
    return UIState()


@pytest.fixture
def jpeg_bytes() -> bytes:
    """A small JPEG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (8, 6), color=(200, 40, 20)).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    """A small RGBA PNG image."""
    buffer = io.BytesIO()
    Image.new("RGBA", (8, 6), color=(20, 40, 200, 128)).save(buffer, format="PNG")
    return buffer.getvalue()
