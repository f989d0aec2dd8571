"""
Tests for the Qt controller's copied-flag expiry.
"""

import pytest

QtCore = pytest.importorskip("PySide6.QtCore")

from stackr.core.export import CopyAcknowledgement  # noqa: E402
from stackr.ui.controller import ComposerController  # noqa: E402


@pytest.fixture
def controller(qt_app):
    c = ComposerController()
    emitted = []
    c.copiedChanged.connect(emitted.append)
    c.emitted = emitted
    return c


def _spin(ms):
    loop = QtCore.QEventLoop()
    QtCore.QTimer.singleShot(ms, loop.quit)
    loop.exec()


class TestCopiedExpiry:
    def test_timer_is_precise_single_shot(self, controller):
        controller.mark_copied()
        timer = controller._copied_timer
        assert timer.isActive()
        assert timer.isSingleShot()
        assert timer.timerType() == QtCore.Qt.PreciseTimer
        assert timer.interval() == 2000

    def test_expiry_clears_without_consulting_clock(self, controller):
        controller.mark_copied()
        # Fired ahead of the clock: the flag still reads True by time
        assert controller.copy_ack.copied
        controller._expire_copied()
        assert not controller.copy_ack.copied
        assert controller.emitted == [True, False]

    def test_every_copy_eventually_resets(self, controller):
        controller.copy_ack = CopyAcknowledgement(reset_ms=50)
        for _ in range(5):
            controller.emitted.clear()
            controller.mark_copied()
            _spin(250)
            assert controller.emitted == [True, False]
            assert not controller.copy_ack.copied

    def test_recopy_restarts_single_expiry(self, controller):
        controller.copy_ack = CopyAcknowledgement(reset_ms=100)
        controller.mark_copied()
        _spin(40)
        controller.mark_copied()
        _spin(300)
        assert controller.emitted == [True, True, False]
