"""
Pytest configuration and fixtures.
"""

import os
import sys

import pytest

# Add repo root to path (app_config lives there)
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from stackr.core.document import ComposerState  # noqa: E402
from stackr.core.layers import CanvasSize, TextLayer, VideoLayer  # noqa: E402


def _fixed_width(text, font_size, font_family, bold, italic):
    # 10px per character regardless of font
    return len(text) * 10.0


@pytest.fixture(scope="session")
def qt_app():
    """Offscreen QApplication for the shell tests; skipped without PySide6."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    QtWidgets = pytest.importorskip("PySide6.QtWidgets")
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


@pytest.fixture
def measurer():
    """Deterministic text measurer."""
    return _fixed_width


@pytest.fixture
def canvas():
    """Square 1000x1000 canvas."""
    return CanvasSize(1000, 1000)


@pytest.fixture
def video():
    return VideoLayer(id="video-1", name="Video 1", x=100, y=100, width=200, height=100, z_index=1)


@pytest.fixture
def text():
    return TextLayer(id="text-2", name="Text 1", text="Hello", font_size=20, x=50, y=400, z_index=2)


@pytest.fixture
def state(video, text):
    """Default 504x846 canvas holding one video and one text layer."""
    return ComposerState(layers=(video, text), id_counter=2)
