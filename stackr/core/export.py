# stackr/core/export.py
from __future__ import annotations
import time
from dataclasses import dataclass
from typing import Callable, Optional

from app_config import COPIED_RESET_MS, EXPORT_FILENAME


@dataclass(frozen=True)
class DownloadPayload:
    filename: str
    text: str

    def encode(self) -> bytes:
        return self.text.encode("utf-8")


def download_payload(command: str, filename: str = EXPORT_FILENAME) -> DownloadPayload:
    return DownloadPayload(filename=filename, text=command)


class CopyAcknowledgement:
    """
    The short-lived "copied" flag shown after a clipboard copy.
    Reads are time based so no timer is needed to clear it; the shell still
    schedules a repaint at reset_ms.
    """
    def __init__(self, reset_ms: int = COPIED_RESET_MS, clock: Callable[[], float] = time.monotonic):
        self.reset_ms = int(reset_ms)
        self._clock = clock
        self._copied_at: Optional[float] = None

    def mark(self) -> None:
        self._copied_at = self._clock()

    def clear(self) -> None:
        self._copied_at = None

    @property
    def copied(self) -> bool:
        if self._copied_at is None:
            return False
        if (self._clock() - self._copied_at) * 1000.0 >= self.reset_ms:
            self._copied_at = None
            return False
        return True
