"""
Tests for handle resizing and dragging.
"""

import pytest

from stackr.core.geometry import HANDLES
from stackr.core.layers import CanvasSize, Rect
from stackr.core.snapping import Snapper
from stackr.core.transform import drag_position, resize_rect

ANCHOR = Rect(100, 100, 200, 100)


def _as_tuple(r):
    return (r.x, r.y, r.width, r.height)


class TestResizeFree:
    def test_se_grows_right_and_down(self, canvas):
        r = resize_rect("se", ANCHOR, 50, 20, canvas)
        assert _as_tuple(r) == (100, 100, 250, 120)

    def test_nw_keeps_bottom_right_fixed(self, canvas):
        r = resize_rect("nw", ANCHOR, 50, 20, canvas)
        assert _as_tuple(r) == (150, 120, 150, 80)
        assert (r.right, r.bottom) == (ANCHOR.right, ANCHOR.bottom)

    def test_w_moves_left_edge(self, canvas):
        r = resize_rect("w", ANCHOR, -50, 999, canvas)
        assert _as_tuple(r) == (50, 100, 250, 100)

    def test_n_moves_top_edge(self, canvas):
        r = resize_rect("n", ANCHOR, 999, -30, canvas)
        assert _as_tuple(r) == (100, 70, 200, 130)

    def test_minimum_size(self, canvas):
        r = resize_rect("se", ANCHOR, -500, -500, canvas)
        assert (r.width, r.height) == (50, 50)
        assert (r.x, r.y) == (100, 100)

    def test_minimum_size_from_left_pins_right_edge(self, canvas):
        r = resize_rect("nw", ANCHOR, 500, 500, canvas)
        assert (r.width, r.height) == (50, 50)
        assert (r.right, r.bottom) == (300, 200)

    def test_stays_inside_canvas(self, canvas):
        r = resize_rect("se", ANCHOR, 2000, 2000, canvas)
        assert _as_tuple(r) == (0, 0, 1000, 1000)

    def test_snaps_size(self, canvas):
        r = resize_rect("se", ANCHOR, 33, 0, canvas, snap=Snapper(True, 20))
        assert _as_tuple(r) == (100, 100, 240, 100)


class TestResizeLocked:
    @pytest.mark.parametrize("handle", HANDLES)
    @pytest.mark.parametrize("delta", [(40, 40), (-40, -40), (60, -25)])
    def test_ratio_holds_for_every_handle(self, canvas, handle, delta):
        r = resize_rect(handle, ANCHOR, delta[0], delta[1], canvas, aspect_locked=True, aspect_ratio=2.0)
        assert r.width / r.height == pytest.approx(2.0)
        assert r.width >= 50 and r.height >= 50
        assert r.x >= 0 and r.y >= 0
        assert r.right <= canvas.width and r.bottom <= canvas.height

    def test_width_drives_corner(self, canvas):
        r = resize_rect("se", ANCHOR, 100, 0, canvas, aspect_locked=True, aspect_ratio=2.0)
        assert _as_tuple(r) == (100, 100, 300, 150)

    def test_height_drives_n(self, canvas):
        r = resize_rect("n", ANCHOR, 0, -50, canvas, aspect_locked=True, aspect_ratio=2.0)
        assert _as_tuple(r) == (100, 50, 300, 150)

    def test_floor_rederives_driver(self, canvas):
        r = resize_rect("se", ANCHOR, -190, 0, canvas, aspect_locked=True, aspect_ratio=2.0)
        assert (r.width, r.height) == (100, 50)

    def test_oversize_keeps_ratio(self, canvas):
        r = resize_rect("se", ANCHOR, 2000, 0, canvas, aspect_locked=True, aspect_ratio=2.0)
        assert r.width == pytest.approx(1000)
        assert r.height == pytest.approx(500)
        assert r.x == pytest.approx(0)

    def test_unlocked_ignores_ratio(self, canvas):
        r = resize_rect("se", ANCHOR, 100, 0, canvas, aspect_locked=False, aspect_ratio=2.0)
        assert (r.width, r.height) == (300, 100)


class TestDrag:
    def test_follows_pointer_minus_grab(self, canvas):
        assert drag_position((500, 500), (10, 10), 100, 100, canvas) == (490, 490)

    def test_clamped_to_canvas(self, canvas):
        assert drag_position((-50, 0), (0, 0), 100, 100, canvas) == (0, 0)
        assert drag_position((2000, 2000), (0, 0), 100, 100, canvas) == (900, 900)

    def test_snaps(self, canvas):
        assert drag_position((505, 505), (0, 0), 100, 100, canvas, Snapper(True, 20)) == (500, 500)

    def test_snap_never_leaves_canvas(self):
        canvas = CanvasSize(990, 990)
        x, y = drag_position((2000, 2000), (0, 0), 100, 100, canvas, Snapper(True, 20))
        assert (x, y) == (890, 890)
