from __future__ import annotations

import itertools
import logging
from enum import Enum
from typing import Callable, Dict, Hashable, Optional, Protocol

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    def request(self, callback: Callable[[], None]) -> Hashable: ...
    def cancel(self, handle: Hashable) -> None: ...


class ManualScheduler:
    """Scheduler driven by hand, one display refresh per `advance` step.

    Callbacks requested while a slot is running fire in the following slot.
    """

    def __init__(self):
        self._pending: Dict[int, Callable[[], None]] = {}
        self._ids = itertools.count()

    def request(self, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def advance(self, slots: int = 1) -> None:
        for _ in range(slots):
            # a failing callback leaves the rest of its slot pending
            for handle in list(self._pending):
                callback = self._pending.pop(handle, None)
                if callback is not None:
                    callback()


class ClockState(Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class AnimationClock:
    """Frame counter that advances once per display refresh while enabled."""

    def __init__(
        self,
        scheduler: Scheduler,
        running: bool = True,
        on_tick: Optional[Callable[[int], None]] = None,
        frame: int = 0,
    ):
        if frame < 0:
            raise ValueError(f"frame must be non-negative, got {frame}")
        self._scheduler = scheduler
        self._on_tick = on_tick
        self._frame = int(frame)
        self._handle: Optional[Hashable] = None
        self._state = ClockState.STOPPED
        self._closed = False
        if running:
            self.set_enabled(True)

    @property
    def frame(self) -> int:
        return self._frame

    @property
    def state(self) -> ClockState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state is ClockState.RUNNING

    @property
    def closed(self) -> bool:
        return self._closed

    def set_enabled(self, enabled: bool) -> None:
        if enabled:
            if self._closed:
                raise RuntimeError("clock has been closed")
            if self._state is ClockState.RUNNING:
                return
            self._state = ClockState.RUNNING
            self._arm()
            logger.info("Animation clock started at frame %d", self._frame)
        else:
            if self._state is ClockState.STOPPED:
                return
            self._state = ClockState.STOPPED
            self._disarm()
            logger.info("Animation clock stopped at frame %d", self._frame)

    def start(self) -> None:
        self.set_enabled(True)

    def stop(self) -> None:
        self.set_enabled(False)

    def close(self) -> None:
        self.stop()
        self._closed = True

    def __enter__(self) -> "AnimationClock":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _arm(self) -> None:
        if self._handle is None:
            self._handle = self._scheduler.request(self._fire)

    def _disarm(self) -> None:
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        if self._state is not ClockState.RUNNING:
            return
        self._frame += 1
        # rearm before the callback so a failing listener cannot stall the loop
        self._arm()
        if self._on_tick is not None:
            self._on_tick(self._frame)
