"""
Tests for document reducers.
"""

from dataclasses import replace

import pytest

from stackr.core import document as doc
from stackr.core.document import IDLE, ComposerState, Dragging
from stackr.core.layers import FONT_FAMILIES, TextLayer, VideoLayer


@pytest.fixture
def empty():
    return ComposerState()


class TestAddLayers:
    def test_first_video(self, empty):
        s = doc.add_video_layer(empty)
        (layer,) = s.layers
        assert isinstance(layer, VideoLayer)
        assert layer.id == "video-1"
        assert layer.name == "Video 1"
        assert (layer.x, layer.y, layer.width, layer.height) == (20, 20, 340, 340)
        assert layer.z_index == 1
        assert s.selected_id == "video-1"

    def test_videos_are_staggered(self, empty):
        s = doc.add_video_layer(doc.add_video_layer(empty))
        second = s.layers[1]
        assert second.name == "Video 2"
        assert (second.x, second.y) == (50, 50)
        assert second.z_index == 2

    def test_text_rows(self, empty):
        s = doc.add_text_layer(doc.add_text_layer(empty))
        first, second = s.layers
        assert isinstance(first, TextLayer)
        assert (first.name, first.text, first.font_size) == ("Text 1", "Sample Text", 48)
        assert (first.x, first.y) == (50, 50)
        assert second.y == 130

    def test_ids_are_unique_across_kinds(self, empty):
        s = doc.add_text_layer(doc.add_video_layer(empty))
        assert [l.id for l in s.layers] == ["video-1", "text-2"]

    def test_ids_are_not_reused_after_delete(self, empty):
        s = doc.add_video_layer(empty)
        s = doc.remove_layer(s, "video-1")
        s = doc.add_video_layer(s)
        assert s.layers[0].id == "video-2"

    def test_add_snaps_when_enabled(self, empty):
        s = doc.set_snap_to_grid(empty, True)
        s = doc.add_video_layer(doc.add_video_layer(s))
        assert (s.layers[1].x, s.layers[1].y) == (60, 60)


class TestDuplicate:
    def test_copy(self, state):
        s = doc.duplicate_layer(state, "video-1")
        copy = s.layers[-1]
        assert copy.id not in ("video-1", "text-2")
        assert copy.name == "Video 1 (copy)"
        assert (copy.x, copy.y) == (130, 130)
        assert (copy.width, copy.height) == (200, 100)
        assert copy.z_index > max(l.z_index for l in state.layers)
        assert s.selected_id == copy.id

    def test_offset_is_clamped(self, state):
        s = doc.update_layer(state, "video-1", x=450, y=800)
        s = doc.duplicate_layer(s, "video-1")
        copy = s.layers[-1]
        assert (copy.x, copy.y) == (404, 746)

    def test_text(self, state):
        s = doc.duplicate_layer(state, "text-2")
        copy = s.layers[-1]
        assert isinstance(copy, TextLayer)
        assert copy.text == "Hello"
        assert copy.id.startswith("text-")

    def test_unknown(self, state):
        assert doc.duplicate_layer(state, "nope") is state


class TestRemove:
    def test_clears_selection_and_gesture(self, state):
        s = doc.select_layer(state, "video-1")
        s = replace(s, interaction=Dragging("video-1", (0, 0)))
        s = doc.remove_layer(s, "video-1")
        assert [l.id for l in s.layers] == ["text-2"]
        assert s.selected_id is None
        assert s.interaction == IDLE

    def test_keeps_other_selection(self, state):
        s = doc.select_layer(state, "text-2")
        s = doc.remove_layer(s, "video-1")
        assert s.selected_id == "text-2"

    def test_unknown(self, state):
        assert doc.remove_layer(state, "nope") is state


class TestUpdate:
    def test_plain_fields(self, state):
        s = doc.update_layer(state, "video-1", name="Main", visible=False)
        layer = s.layers[0]
        assert (layer.name, layer.visible) == ("Main", False)

    def test_fields_of_other_variant_are_dropped(self, state):
        assert doc.update_layer(state, "text-2", width=100) is state

    def test_size_floor(self, state):
        s = doc.update_layer(state, "video-1", width=10, height=-5)
        assert (s.layers[0].width, s.layers[0].height) == (50, 50)

    def test_lock_captures_ratio(self, state):
        s = doc.update_layer(state, "video-1", aspect_locked=True)
        assert s.layers[0].aspect_ratio == 2.0

    def test_locked_width_derives_height(self, state):
        s = doc.update_layer(state, "video-1", aspect_locked=True)
        s = doc.update_layer(s, "video-1", width=301)
        assert (s.layers[0].width, s.layers[0].height) == (301, 151)

    def test_locked_height_derives_width(self, state):
        s = doc.update_layer(state, "video-1", aspect_locked=True)
        s = doc.update_layer(s, "video-1", height=120)
        assert (s.layers[0].width, s.layers[0].height) == (240, 120)

    def test_unlocked_is_independent(self, state):
        s = doc.update_layer(state, "video-1", width=400)
        assert (s.layers[0].width, s.layers[0].height) == (400, 100)

    def test_text_fields(self, state):
        s = doc.update_layer(state, "text-2", font_family="Papyrus", font_size=4, bold=True)
        layer = s.layers[1]
        assert layer.font_family == FONT_FAMILIES[0]
        assert layer.font_size == 12
        assert layer.bold

    def test_unknown(self, state):
        assert doc.update_layer(state, "nope", x=1) is state


class TestParseField:
    @pytest.mark.parametrize(
        "name,raw,expected",
        [
            ("width", "120", 120.0),
            ("width", "abc", 50),
            ("height", "20", 50),
            ("font_size", "", 48),
            ("font_size", "8", 12),
            ("font_size", "30", 30.0),
            ("x", "nope", 0.0),
            ("y", "nan", 0.0),
            ("x", "12.5", 12.5),
            ("name", "Foo", "Foo"),
        ],
    )
    def test_fallbacks(self, name, raw, expected):
        assert doc.parse_field(name, raw) == expected


class TestOrderingAndSelection:
    def test_move_up_and_down(self, state):
        s = doc.move_layer_up(state, "video-1")
        assert [l.id for l in doc.layers_top_down(s)] == ["video-1", "text-2"]
        s = doc.move_layer_down(s, "video-1")
        assert [l.id for l in doc.layers_top_down(s)] == ["text-2", "video-1"]

    def test_select_unknown_clears(self, state):
        s = doc.select_layer(state, "video-1")
        assert s.selected.id == "video-1"
        assert doc.select_layer(s, "nope").selected_id is None

    def test_reset_video(self, state):
        s = doc.update_layer(state, "video-1", aspect_locked=True)
        s = doc.reset_layer(s, "video-1")
        layer = s.layers[0]
        assert (layer.x, layer.y, layer.width, layer.height) == (20, 20, 340, 340)
        assert not layer.aspect_locked

    def test_reset_text_keeps_content(self, state):
        s = doc.reset_layer(state, "text-2")
        layer = s.layers[1]
        assert (layer.x, layer.y, layer.font_size, layer.text) == (50, 50, 48, "Hello")


class TestCanvas:
    def test_template_sets_canvas(self, state):
        s = doc.load_template(state, "frame.png", 1080, 1920)
        assert s.template_present
        assert (s.canvas.width, s.canvas.height) == (1080, 1920)

    def test_bad_template_size_ignored(self, state):
        assert doc.load_template(state, "frame.png", 0, 100) is state

    def test_clear_template_keeps_canvas(self, state):
        s = doc.clear_template(doc.load_template(state, "frame.png", 1080, 1920))
        assert not s.template_present
        assert s.canvas.width == 1080

    def test_reset_canvas(self, state):
        s = doc.reset_canvas(doc.load_template(state, "frame.png", 1080, 1920))
        assert (s.canvas.width, s.canvas.height) == (504, 846)

    def test_opacity_is_clamped(self, state):
        assert doc.set_template_opacity(state, 1.5).template_opacity == 1.0
        assert doc.set_template_opacity(state, -1).template_opacity == 0.0
        assert doc.set_template_opacity(state, "x").template_opacity == 0.6

    def test_grid_size(self, state):
        assert doc.set_grid_size(state, 2).grid_size == 5
        assert doc.set_grid_size(state, "abc").grid_size == 20
        assert doc.set_grid_size(state, "40").grid_size == 40

    def test_grid_toggles(self, state):
        s = doc.set_snap_to_grid(doc.set_show_grid(state, True), True)
        assert s.show_grid and s.snap_to_grid
        assert s.snapper()(29) == 20
