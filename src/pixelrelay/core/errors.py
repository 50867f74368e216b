"""Exception hierarchy for PixelRelay.

Server-side errors (``BodyParseError``, ``EmptyResponse``, ``ProviderError``)
are raised inside the relay and collapsed into a single opaque HTTP 500 by
the route handler; their class names are kept in the server log so failure
causes remain distinguishable there.

Client-side errors (``ClientNetworkError``, ``DownloadError``) are raised by
:class:`pixelrelay.ui.client.RelayClient` and turned into the generic
messages shown by the UI handlers.
"""


class PixelRelayError(Exception):
    """Base class for all PixelRelay errors."""

    pass


class BodyParseError(PixelRelayError):
    """The relay request body was not a JSON object with a string prompt."""

    pass


class EmptyResponse(PixelRelayError):
    """The provider call completed without a payload."""

    pass


class ProviderError(PixelRelayError):
    """The provider call failed (network, auth, quota, or non-2xx status)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ClientNetworkError(PixelRelayError):
    """The relay was unreachable or replied with something other than JSON."""

    pass


class DownloadError(PixelRelayError):
    """Fetching or decoding an image for download failed."""

    pass
