"""Gallery selection and image download handlers."""

import io
import logging
import time
from pathlib import Path

import gradio as gr
from PIL import Image, UnidentifiedImageError

from pixelrelay.core.errors import DownloadError

from ..client import RelayClient
from ..models import DOWNLOAD_FAILED_MESSAGE, UIState
from .generation import render_error

logger = logging.getLogger(__name__)


def download_filename(timestamp_ms: int | None = None) -> str:
    """Return the ``generated-image-<epoch-millis>.jpg`` name for a download."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"generated-image-{timestamp_ms}.jpg"


def save_image_bytes(data: bytes, path: Path) -> Path:
    """Write downloaded image bytes to *path* as JPEG.

    JPEG payloads are written unchanged; any other image format is re-encoded
    so the file matches its ``.jpg`` name.

    Raises:
        DownloadError: If *data* is not a decodable image.
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            image_format = image.format
            if image_format == "JPEG":
                path.write_bytes(data)
            else:
                image.convert("RGB").save(path, format="JPEG")
    except (UnidentifiedImageError, OSError) as e:
        raise DownloadError(f"Downloaded data is not an image: {e}") from e

    logger.debug(f"Saved {image_format} download to {path}")
    return path


def download_image(image_url: str, client: RelayClient, downloads_dir: Path) -> Path:
    """Fetch *image_url* and materialize it as a local JPEG file.

    Args:
        image_url: Provider-hosted image URL
        client: Client used for the fetch
        downloads_dir: Directory receiving the file

    Returns:
        Path of the written file

    Raises:
        DownloadError: If the fetch or decode fails
    """
    data = client.fetch_image(image_url)
    path = Path(downloads_dir) / download_filename()
    return save_image_bytes(data, path)


def release_download(state: UIState) -> None:
    """Delete the file from the previous download, if any."""
    if state.download_path:
        Path(state.download_path).unlink(missing_ok=True)
        state.download_path = None


def select_image(evt: gr.SelectData, state: UIState) -> tuple[gr.update, UIState]:
    """Record which gallery tile the download action targets.

    Args:
        evt: Gradio selection event (``evt.index`` is the tile position)
        state: UI state

    Returns:
        Tuple of (download_button_update, updated_state)
    """
    state.selected_index = evt.index
    return gr.update(interactive=state.selected_image() is not None), state


def download_selected(
    state: UIState, client: RelayClient, downloads_dir: Path
) -> tuple[gr.update, gr.update, UIState]:
    """Download the selected gallery image.

    Generation state (``loading`` and ``images``) is never modified. A failed
    download sets the shared error message.

    Args:
        state: UI state
        client: Client used for the fetch
        downloads_dir: Directory receiving the file

    Returns:
        Tuple of (file_update, error_update, updated_state)
    """
    image = state.selected_image()
    if image is None:
        return gr.update(), render_error(state), state

    try:
        path = download_image(image.image_url, client, downloads_dir)
    except DownloadError as e:
        logger.error(f"Error downloading image: {e}")
        state.error = DOWNLOAD_FAILED_MESSAGE
        return gr.update(value=None, visible=False), render_error(state), state

    if state.download_path != str(path):
        release_download(state)
    state.download_path = str(path)
    logger.info(f"Prepared download {path.name}")
    return gr.update(value=str(path), visible=True), render_error(state), state
