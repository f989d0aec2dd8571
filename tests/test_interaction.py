"""
Tests for the pointer state machine.
"""

from dataclasses import replace

from stackr.core import document as doc
from stackr.core.document import Dragging, Idle, Resizing
from stackr.core.interaction import cursor_hint, pointer_down, pointer_leave, pointer_move, pointer_up


class TestPointerDown:
    def test_press_on_layer_selects_and_drags(self, state, measurer):
        s = pointer_down(state, 150, 150, measurer)
        assert s.selected_id == "video-1"
        assert s.interaction == Dragging("video-1", (50, 50))

    def test_press_on_empty_canvas_clears_selection(self, state, measurer):
        s = doc.select_layer(state, "video-1")
        s = pointer_down(s, 450, 800, measurer)
        assert s.selected_id is None
        assert isinstance(s.interaction, Idle)

    def test_handle_on_selected_video_starts_resize(self, state, measurer):
        s = doc.select_layer(state, "video-1")
        s = pointer_down(s, 300, 200, measurer)
        assert isinstance(s.interaction, Resizing)
        assert s.interaction.handle == "se"
        assert s.interaction.pointer_anchor == (300, 200)

    def test_handle_on_unselected_video_drags(self, state, measurer):
        s = pointer_down(state, 100, 100, measurer)
        assert isinstance(s.interaction, Dragging)

    def test_hidden_layer_is_not_hit(self, state, measurer):
        s = doc.update_layer(state, "video-1", visible=False)
        s = pointer_down(s, 150, 150, measurer)
        assert s.selected_id is None

    def test_text_is_hit_by_measured_box(self, state, measurer):
        s = pointer_down(state, 115, 420, measurer)
        assert s.selected_id == "text-2"
        assert pointer_down(state, 125, 420, measurer).selected_id is None


class TestGestures:
    def test_drag_moves_layer(self, state, measurer):
        s = pointer_down(state, 150, 150, measurer)
        s = pointer_move(s, 250, 250, measurer)
        layer = s.layers[0]
        assert (layer.x, layer.y) == (200, 200)
        assert (layer.width, layer.height) == (200, 100)

    def test_drag_text_stays_on_canvas(self, state, measurer):
        s = pointer_down(state, 60, 410, measurer)
        s = pointer_move(s, 5000, 410, measurer)
        layer = s.layers[1]
        # 70px wide measured box on a 504px canvas
        assert layer.x == 434

    def test_resize_from_handle(self, state, measurer):
        s = doc.select_layer(state, "video-1")
        s = pointer_down(s, 300, 200, measurer)
        s = pointer_move(s, 350, 220, measurer)
        layer = s.layers[0]
        assert (layer.x, layer.y, layer.width, layer.height) == (100, 100, 250, 120)

    def test_resize_is_relative_to_gesture_start(self, state, measurer):
        s = doc.select_layer(state, "video-1")
        s = pointer_down(s, 300, 200, measurer)
        s = pointer_move(s, 350, 220, measurer)
        s = pointer_move(s, 310, 200, measurer)
        assert (s.layers[0].width, s.layers[0].height) == (210, 100)

    def test_resize_keeps_aspect_when_locked(self, state, measurer):
        s = doc.update_layer(state, "video-1", aspect_locked=True)
        s = doc.select_layer(s, "video-1")
        s = pointer_down(s, 300, 200, measurer)
        s = pointer_move(s, 400, 200, measurer)
        assert (s.layers[0].width, s.layers[0].height) == (300, 150)

    def test_release_and_leave_end_gesture(self, state, measurer):
        s = pointer_down(state, 150, 150, measurer)
        assert isinstance(pointer_up(s).interaction, Idle)
        assert isinstance(pointer_leave(s).interaction, Idle)

    def test_move_while_idle_is_noop(self, state, measurer):
        assert pointer_move(state, 10, 10, measurer) is state

    def test_stale_layer_is_noop(self, state, measurer):
        s = replace(state, interaction=Dragging("gone", (0, 0)))
        assert pointer_move(s, 10, 10, measurer) is s

    def test_snap_applies_during_drag(self, state, measurer):
        s = doc.set_snap_to_grid(state, True)
        s = pointer_down(s, 150, 150, measurer)
        s = pointer_move(s, 263, 257, measurer)
        assert (s.layers[0].x, s.layers[0].y) == (220, 200)


class TestCursorHint:
    def test_hover_over_handle(self, state):
        s = doc.select_layer(state, "video-1")
        assert cursor_hint(s, 100, 200) == "nesw-resize"
        assert cursor_hint(s, 150, 150) == "move"

    def test_during_resize(self, state, measurer):
        s = doc.select_layer(state, "video-1")
        s = pointer_down(s, 200, 100, measurer)
        assert cursor_hint(s, 0, 0) == "ns-resize"


class TestHiddenSelection:
    def test_hidden_video_cannot_be_resized(self, state, measurer):
        s = doc.select_layer(state, "video-1")
        s = doc.update_layer(s, "video-1", visible=False)
        s = pointer_down(s, 300, 200, measurer)
        assert not isinstance(s.interaction, Resizing)
        assert s.selected_id is None

    def test_hidden_video_shows_no_resize_cursor(self, state):
        s = doc.select_layer(state, "video-1")
        s = doc.update_layer(s, "video-1", visible=False)
        assert cursor_hint(s, 300, 200) == "move"
