"""Prompt editing and image generation handlers."""

import logging
from collections.abc import Iterator

import gradio as gr

from pixelrelay.api.models import ErrorResponse
from pixelrelay.core.errors import ClientNetworkError

from ..client import RelayClient
from ..models import GENERATION_RETRY_MESSAGE, LOADING_MESSAGE, UIState

logger = logging.getLogger(__name__)


def begin_submission(state: UIState) -> bool:
    """Admit a submission if the prompt is non-empty and none is in flight.

    On admission the in-flight token is held, ``loading`` is set and any
    previous error is cleared.

    Args:
        state: UI state

    Returns:
        True if the submission was admitted
    """
    if not state.has_prompt():
        logger.debug("Submission ignored: empty prompt")
        return False

    if not state.inflight.acquire():
        logger.info("Submission rejected: another generation is in flight")
        return False

    state.loading = True
    state.error = ""
    return True


def complete_submission(state: UIState, client: RelayClient) -> UIState:
    """Run the relay call for an admitted submission.

    ``loading`` is cleared and the token released on every outcome.

    Args:
        state: UI state (must have been admitted by :func:`begin_submission`)
        client: Relay client

    Returns:
        Updated state
    """
    try:
        reply = client.generate(state.prompt)

        if isinstance(reply, ErrorResponse):
            logger.warning(f"Relay reported an error: {reply.error}")
            state.error = reply.error
            return state

        state.prepend_batch(reply.images)
        logger.info(f"Added {len(reply.images)} image(s), gallery now holds {len(state.images)}")

    except ClientNetworkError as e:
        logger.error(f"Error generating image: {e}")
        state.error = GENERATION_RETRY_MESSAGE

    finally:
        state.loading = False
        state.inflight.release()

    return state


def submit_prompt(state: UIState, client: RelayClient) -> UIState:
    """Gate and run one submission for the prompt held in *state*."""
    if begin_submission(state):
        state = complete_submission(state, client)
    return state


def edit_prompt(prompt: str, state: UIState) -> tuple[gr.update, gr.update, UIState]:
    """Store the edited prompt and clear any error message.

    Args:
        prompt: New textbox value
        state: UI state

    Returns:
        Tuple of (error_update, generate_button_update, updated_state)
    """
    state.prompt = prompt or ""
    state.error = ""
    return (
        render_error(state),
        gr.update(interactive=state.has_prompt() and not state.loading),
        state,
    )


def generate_image(prompt: str, state: UIState, client: RelayClient) -> Iterator[tuple]:
    """Gradio event handler shared by the Generate button and the Enter key.

    Yields the loading view first, then the final view once the relay has
    answered. A rejected submission yields the unchanged view once.

    Args:
        prompt: Current textbox value
        state: UI state
        client: Relay client

    Yields:
        Tuples matching :func:`render_generation_view`
    """
    state.prompt = prompt or ""

    if not begin_submission(state):
        yield render_generation_view(state)
        return

    try:
        yield render_generation_view(state)
        state = complete_submission(state, client)
    finally:
        # The event may be cancelled between yields.
        if state.loading:
            state.loading = False
            state.inflight.release()

    yield render_generation_view(state)


def render_error(state: UIState) -> gr.update:
    """Return the error banner update for *state*."""
    if state.error:
        return gr.update(value=f"**{state.error}**", visible=True)
    return gr.update(value="", visible=False)


def render_generation_view(state: UIState) -> tuple:
    """Map *state* onto the generation tab components.

    Returns:
        Tuple of (prompt_update, generate_button_update, loading_update,
        error_update, gallery_update, download_button_update, state)
    """
    gallery_items = [
        (image.image_url, f"Generated image {i + 1}") for i, image in enumerate(state.images)
    ]
    return (
        gr.update(interactive=not state.loading),
        gr.update(interactive=state.has_prompt() and not state.loading),
        gr.update(value=LOADING_MESSAGE if state.loading else "", visible=state.loading),
        render_error(state),
        gr.update(value=gallery_items, visible=state.show_images and bool(state.images)),
        gr.update(interactive=state.selected_image() is not None),
        state,
    )
