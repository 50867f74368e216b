"""Data models for PixelRelay UI state."""

import logging
import threading
from dataclasses import dataclass, field

from pixelrelay.api.models import GeneratedImage

logger = logging.getLogger(__name__)


class InFlightToken:
    """Single-slot token guarding the submission operation.

    ``acquire`` is a non-blocking lock acquisition, so checking whether a
    submission is running and claiming the slot happen in one step.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def acquire(self) -> bool:
        """Claim the slot. Returns False if a submission already holds it."""
        return self._lock.acquire(blocking=False)

    def release(self) -> None:
        """Free the slot. Releasing a free token is a no-op."""
        if self._lock.locked():
            self._lock.release()

    @property
    def held(self) -> bool:
        return self._lock.locked()

    def __deepcopy__(self, memo) -> "InFlightToken":
        # Gradio deep-copies the initial gr.State value for every session.
        return InFlightToken()


@dataclass
class UIState:
    """Session state for the Gradio UI.

    One instance exists per browser session and is discarded on reload.

    Attributes
    ----------
    prompt : str
        Current prompt text
    loading : bool
        True while a submission is in flight
    error : str
        Message shown in the error banner ("" when there is none)
    images : list[GeneratedImage]
        All images of the session, newest batch first
    show_images : bool
        Becomes True after the first successful batch and stays True
    selected_index : int | None
        Gallery tile targeted by the download action
    download_path : str | None
        Most recent file materialized by the download action
    max_images : int | None
        Optional cap on ``images`` (None = unbounded)
    """

    prompt: str = ""
    loading: bool = False
    error: str = ""
    images: list[GeneratedImage] = field(default_factory=list)
    show_images: bool = False
    selected_index: int | None = None
    download_path: str | None = None
    max_images: int | None = None
    inflight: InFlightToken = field(default_factory=InFlightToken, repr=False, compare=False)

    def has_prompt(self) -> bool:
        """True when the prompt has content after trimming."""
        return bool(self.prompt and self.prompt.strip())

    def prepend_batch(self, batch: list[GeneratedImage]) -> None:
        """Put *batch* in front of the gallery, keeping its internal order.

        The gallery re-renders with the new batch, which resets its visible
        selection, so the download target is cleared too. When ``max_images``
        is set the oldest images are dropped.
        """
        self.images = list(batch) + self.images
        self.show_images = True
        self.selected_index = None

        if self.max_images is not None and len(self.images) > self.max_images:
            dropped = len(self.images) - self.max_images
            self.images = self.images[: self.max_images]
            logger.debug(f"Gallery cap reached, dropped {dropped} oldest image(s)")

    def selected_image(self) -> GeneratedImage | None:
        """Return the image targeted by the download action, if any."""
        if self.selected_index is None or not 0 <= self.selected_index < len(self.images):
            return None
        return self.images[self.selected_index]


# UI text
TITLE = "Image Generator"
PROMPT_PLACEHOLDER = "Describe the image you want to generate..."
LOADING_MESSAGE = "Generating your masterpieces..."
GENERATION_RETRY_MESSAGE = "Failed to generate image. Please try again."
DOWNLOAD_FAILED_MESSAGE = "Failed to download image. Please try again."
