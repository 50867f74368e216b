"""Unit tests for pixelrelay.ui.client.RelayClient."""

import json

import httpx
import pytest

from pixelrelay.api.models import ErrorResponse, GenerationResult
from pixelrelay.core.errors import ClientNetworkError, DownloadError
from pixelrelay.ui.client import RelayClient

RELAY_BODY = {
    "images": [
        {"imageUrl": f"https://fal.media/files/fox/{i}.jpeg", "width": 1024, "height": 768}
        for i in range(4)
    ],
    "seed": 12345,
}


def make_client(handler) -> RelayClient:
    return RelayClient("http://relay.test", transport=httpx.MockTransport(handler))


class TestGenerate:
    def test_posts_prompt_to_relay(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=RELAY_BODY)

        make_client(handler).generate("a red fox in snow")

        assert seen == {
            "method": "POST",
            "url": "http://relay.test/api/generate",
            "body": {"prompt": "a red fox in snow"},
        }

    def test_success_returns_result(self):
        reply = make_client(lambda r: httpx.Response(200, json=RELAY_BODY)).generate("x")

        assert isinstance(reply, GenerationResult)
        assert reply.seed == 12345
        assert reply.images[0].image_url == "https://fal.media/files/fox/0.jpeg"

    def test_error_body_returns_error_response(self):
        client = make_client(
            lambda r: httpx.Response(500, json={"error": "Failed to generate image"})
        )
        reply = client.generate("x")

        assert isinstance(reply, ErrorResponse)
        assert reply.error == "Failed to generate image"

    def test_error_field_wins_over_status(self):
        client = make_client(lambda r: httpx.Response(200, json={"error": "quota"}))
        assert client.generate("x") == ErrorResponse(error="quota")

    def test_non_json_raises(self):
        client = make_client(lambda r: httpx.Response(502, text="<html>Bad Gateway</html>"))
        with pytest.raises(ClientNetworkError):
            client.generate("x")

    def test_unreachable_relay_raises(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ClientNetworkError):
            make_client(handler).generate("x")

    def test_unexpected_body_raises(self):
        client = make_client(lambda r: httpx.Response(200, json={"images": None}))
        with pytest.raises(ClientNetworkError):
            client.generate("x")


class TestFetchImage:
    def test_returns_bytes_from_absolute_url(self, jpeg_bytes):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            return httpx.Response(200, content=jpeg_bytes)

        data = make_client(handler).fetch_image("https://fal.media/files/fox/0.jpeg")

        assert data == jpeg_bytes
        assert seen["url"] == "https://fal.media/files/fox/0.jpeg"

    def test_http_error_status_raises(self):
        client = make_client(lambda r: httpx.Response(404))
        with pytest.raises(DownloadError):
            client.fetch_image("https://fal.media/missing.jpeg")

    def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(DownloadError):
            make_client(handler).fetch_image("https://fal.media/x.jpeg")
