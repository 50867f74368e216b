"""UI event handlers organized by feature area.

- generation: Prompt editing and the submission operation
- download: Gallery selection and per-image download
"""

from .download import (
    download_image,
    download_selected,
    select_image,
)
from .generation import (
    begin_submission,
    complete_submission,
    edit_prompt,
    generate_image,
    render_generation_view,
    submit_prompt,
)

__all__ = [
    # Generation handlers
    "begin_submission",
    "complete_submission",
    "edit_prompt",
    "generate_image",
    "render_generation_view",
    "submit_prompt",
    # Download handlers
    "download_image",
    "download_selected",
    "select_image",
]
