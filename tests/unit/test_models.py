"""Unit tests for UI data models."""

import copy

from pixelrelay.api.models import GeneratedImage
from pixelrelay.ui.models import InFlightToken, UIState


def batch(tag: str, count: int = 4) -> list[GeneratedImage]:
    return [
        GeneratedImage(image_url=f"https://img/{tag}/{i}.jpg", width=1024, height=768)
        for i in range(count)
    ]


class TestInFlightToken:
    def test_starts_free(self):
        assert InFlightToken().held is False

    def test_second_acquire_is_rejected(self):
        token = InFlightToken()
        assert token.acquire() is True
        assert token.acquire() is False
        assert token.held is True

    def test_release_frees_slot(self):
        token = InFlightToken()
        token.acquire()
        token.release()
        assert token.held is False
        assert token.acquire() is True

    def test_release_when_free_is_noop(self):
        token = InFlightToken()
        token.release()
        assert token.held is False

    def test_deepcopy_gives_independent_token(self):
        token = InFlightToken()
        clone = copy.deepcopy(token)
        token.acquire()
        assert clone.held is False


class TestUIStateDefaults:
    def test_defaults(self, ui_state):
        assert ui_state.prompt == ""
        assert ui_state.loading is False
        assert ui_state.error == ""
        assert ui_state.images == []
        assert ui_state.show_images is False
        assert ui_state.selected_index is None
        assert ui_state.max_images is None

    def test_deepcopy_for_new_session(self):
        """Gradio copies the initial state per session; copies share nothing."""
        template = UIState(max_images=10)
        session = copy.deepcopy(template)
        session.prepend_batch(batch("a"))
        session.inflight.acquire()

        assert template.images == []
        assert template.inflight.held is False
        assert session.max_images == 10


class TestHasPrompt:
    def test_empty(self, ui_state):
        assert ui_state.has_prompt() is False

    def test_whitespace_only(self, ui_state):
        ui_state.prompt = " \t\n "
        assert ui_state.has_prompt() is False

    def test_text(self, ui_state):
        ui_state.prompt = " fox "
        assert ui_state.has_prompt() is True


class TestPrependBatch:
    def test_first_batch_shows_gallery(self, ui_state):
        ui_state.prepend_batch(batch("a"))
        assert ui_state.show_images is True
        assert len(ui_state.images) == 4

    def test_newest_batch_first_order_preserved(self, ui_state):
        first, second = batch("first"), batch("second")
        ui_state.prepend_batch(first)
        ui_state.prepend_batch(second)

        assert ui_state.images == second + first

    def test_new_batch_clears_selection(self, ui_state):
        ui_state.prepend_batch(batch("a"))
        ui_state.selected_index = 1

        ui_state.prepend_batch(batch("b"))

        assert ui_state.selected_index is None
        assert ui_state.selected_image() is None

    def test_unbounded_by_default(self, ui_state):
        for i in range(30):
            ui_state.prepend_batch(batch(str(i)))
        assert len(ui_state.images) == 120

    def test_cap_drops_oldest(self):
        state = UIState(max_images=6)
        first, second = batch("first"), batch("second")
        state.prepend_batch(first)
        state.prepend_batch(second)

        assert state.images == second + first[:2]

    def test_cap_clears_selection_of_dropped_image(self):
        state = UIState(max_images=4)
        state.prepend_batch(batch("a"))
        state.selected_index = 3
        state.prepend_batch(batch("b"))
        assert state.selected_index is None


class TestSelectedImage:
    def test_none_without_selection(self, ui_state):
        ui_state.prepend_batch(batch("a"))
        assert ui_state.selected_image() is None

    def test_out_of_range(self, ui_state):
        ui_state.selected_index = 2
        assert ui_state.selected_image() is None

    def test_returns_image(self, ui_state):
        images = batch("a")
        ui_state.prepend_batch(images)
        ui_state.selected_index = 2
        assert ui_state.selected_image() == images[2]
