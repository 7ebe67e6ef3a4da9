from __future__ import annotations

import time
from typing import Callable, Optional


class FrameScheduler:
    """Runs a tick callback once per frame with measured delta time.

    The owner calls ``pump()`` every frame. A tick only runs when one has
    been requested; a tick requests the next one only while still playing,
    so ``stop()`` from inside a tick lets that tick finish and suppresses the
    following one.
    """

    def __init__(
        self,
        on_tick: Callable[[float], None],
        time_source: Callable[[], float] = time.perf_counter,
        max_dt: Optional[float] = None,
    ) -> None:
        self.on_tick = on_tick
        self.time_source = time_source
        self.max_dt = max_dt
        self.is_playing = False
        self.frames = 0
        self._pending = False
        self._timestamp = 0.0

    @property
    def has_pending_tick(self) -> bool:
        return self._pending

    def start(self) -> None:
        self.is_playing = True
        self._timestamp = self.time_source()
        self._pending = True

    def stop(self) -> None:
        self.is_playing = False
        self._pending = False

    def toggle(self) -> None:
        """Pause or resume."""
        if self.is_playing:
            self.stop()
        else:
            self.start()

    def pump(self) -> bool:
        """Run the pending tick, if any. Returns True if a tick ran."""
        if not self._pending:
            return False
        self._pending = False

        now = self.time_source()
        dt = max(0.0, now - self._timestamp)
        if self.max_dt is not None:
            dt = min(dt, self.max_dt)

        self.on_tick(dt)
        self.frames += 1

        if self.is_playing:
            self._timestamp = now
            self._pending = True
        return True
