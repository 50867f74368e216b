"""Gradio UI for PixelRelay Image Generator."""

import logging

import gradio as gr

from pixelrelay.core.config import PixelRelayConfig

from .client import RelayClient
from .handlers import download_selected, edit_prompt, generate_image, select_image
from .models import PROMPT_PLACEHOLDER, TITLE, UIState

logger = logging.getLogger(__name__)


def create_ui(settings: PixelRelayConfig, client: RelayClient | None = None) -> gr.Blocks:
    """Create the Gradio UI.

    Args:
        settings: Configuration (relay URL, timeouts, downloads dir, gallery cap)
        client: Optional relay client; one is built from *settings* if omitted

    Returns:
        Gradio Blocks app
    """
    if client is None:
        client = RelayClient(settings.resolved_relay_url, timeout=settings.client_timeout)
    downloads_dir = settings.downloads_dir

    app = gr.Blocks(title=TITLE)

    with app:
        # Session state - one instance per browser tab
        ui_state = gr.State(UIState(max_images=settings.gallery_max_images))

        gr.Markdown(f"# {TITLE}")

        with gr.Row():
            prompt_input = gr.Textbox(
                show_label=False,
                placeholder=PROMPT_PLACEHOLDER,
                scale=5,
                max_lines=1,
            )
            generate_btn = gr.Button("Generate", variant="primary", interactive=False, scale=1)

        loading_output = gr.Markdown(value="", visible=False)
        error_output = gr.Markdown(value="", visible=False)

        gallery = gr.Gallery(
            label="Generated images",
            columns=2,
            object_fit="cover",
            visible=False,
        )

        with gr.Row():
            download_btn = gr.Button("Download image", size="sm", interactive=False)
            download_file = gr.File(label="Download", visible=False, interactive=False)

        # Event handlers
        def run_generation(prompt, state):
            yield from generate_image(prompt, state, client)

        def run_download(state):
            return download_selected(state, client, downloads_dir)

        generation_outputs = [
            prompt_input,
            generate_btn,
            loading_output,
            error_output,
            gallery,
            download_btn,
            ui_state,
        ]

        prompt_input.input(
            fn=edit_prompt,
            inputs=[prompt_input, ui_state],
            outputs=[error_output, generate_btn, ui_state],
        )

        # Button click and Enter key share one submission path. Events are not
        # limited across sessions; the in-flight token gates each session.
        generate_btn.click(
            fn=run_generation,
            inputs=[prompt_input, ui_state],
            outputs=generation_outputs,
            concurrency_limit=None,
        )
        prompt_input.submit(
            fn=run_generation,
            inputs=[prompt_input, ui_state],
            outputs=generation_outputs,
            concurrency_limit=None,
        )

        gallery.select(
            fn=select_image,
            inputs=[ui_state],
            outputs=[download_btn, ui_state],
        )

        download_btn.click(
            fn=run_download,
            inputs=[ui_state],
            outputs=[download_file, error_output, ui_state],
            concurrency_limit=None,
        )

    logger.info(f"UI created (relay: {settings.resolved_relay_url})")
    return app
