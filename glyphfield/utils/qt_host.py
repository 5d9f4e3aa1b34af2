from __future__ import annotations

import itertools
import logging
from typing import Callable, Dict, Optional

from PySide6.QtCore import QObject, Qt, QTimer
from PySide6.QtGui import QGuiApplication

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_HZ = 60.0


def refresh_interval_ms(refresh_hz: Optional[float]) -> int:
    if not refresh_hz or refresh_hz <= 0:
        refresh_hz = DEFAULT_REFRESH_HZ
    return max(1, int(round(1000.0 / refresh_hz)))


def screen_refresh_rate() -> float:
    app = QGuiApplication.instance()
    if not isinstance(app, QGuiApplication):
        return DEFAULT_REFRESH_HZ
    screen = QGuiApplication.primaryScreen()
    if screen is None:
        return DEFAULT_REFRESH_HZ
    rate = float(screen.refreshRate())
    return rate if rate > 0 else DEFAULT_REFRESH_HZ


class QtFrameScheduler:
    """One-shot QTimer per request, paced to the primary screen's refresh rate."""

    def __init__(self, parent: Optional[QObject] = None, refresh_hz: Optional[float] = None):
        self._parent = parent
        self.interval_ms = refresh_interval_ms(refresh_hz or screen_refresh_rate())
        self._timers: Dict[int, QTimer] = {}
        self._ids = itertools.count()

    def request(self, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        timer.setTimerType(Qt.PreciseTimer)

        def fire():
            if self._timers.pop(handle, None) is None:
                return
            timer.deleteLater()
            callback()

        timer.timeout.connect(fire)
        self._timers[handle] = timer
        timer.start(self.interval_ms)
        return handle

    def cancel(self, handle: int) -> None:
        timer = self._timers.pop(handle, None)
        if timer is not None:
            timer.stop()
            timer.deleteLater()

    @property
    def pending(self) -> int:
        return len(self._timers)

    def close(self) -> None:
        for handle in list(self._timers):
            self.cancel(handle)


def copy_to_clipboard(text: str) -> None:
    app = QGuiApplication.instance()
    if not isinstance(app, QGuiApplication):
        raise RuntimeError("a QGuiApplication must be running to use the clipboard")
    QGuiApplication.clipboard().setText(str(text))
    logger.debug("Copied %d characters to clipboard", len(text))
