"""Frame-rate capped render loop.

Every tick compares the clock against the time of the last rendered frame.
If more than ``1000 / fps`` milliseconds passed it renders one frame and calls
the user callback with the forest; either way it asks the host timer for the
next tick. Ticks arriving early are dropped and late ticks simply render late,
so animation speed follows frames rendered, not wall-clock time.
"""

import logging
import time
from typing import Any, Callable, Optional, Sequence

from spritegraph.config import DEFAULT_FPS
from spritegraph.nodes import Node
from spritegraph.types import Clock, FrameCallback, FrameTimer


logger = logging.getLogger(__name__)


def _noop(forest: Sequence[Node]) -> None:
    return None


class FrameScheduler:
    """Throttles calls to ``render_fn``.

    Args:
        render_fn: Runs the compositor once.
        forest: The live forest handed to the callback after each frame.
        timer: Host primitive that runs a callback around the next refresh.
        clock: Monotonic clock in milliseconds.
        fps: Target frame rate.
    """

    def __init__(
        self,
        render_fn: Callable[[], Any],
        forest: Sequence[Node],
        timer: FrameTimer,
        clock: Clock,
        fps: float = DEFAULT_FPS,
    ) -> None:
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.render_fn = render_fn
        self.forest = forest
        self.timer = timer
        self.clock = clock
        self.fps = fps
        self.callback: FrameCallback = _noop
        self.last_time: float = 0.0
        self.frames = 0

    @property
    def interval_ms(self) -> float:
        return 1000.0 / self.fps

    def start(self, callback: Optional[FrameCallback] = None) -> None:
        """Install ``callback`` (if given) and run the first tick now."""
        if callback is not None:
            self.callback = callback
        logger.info("Render loop started at %s fps", self.fps)
        self.tick()

    def tick(self) -> None:
        now = self.clock()
        if now - self.last_time > self.interval_ms:
            self.render_fn()
            self.last_time = now
            self.frames += 1
            self.callback(self.forest)
        self.timer.schedule_next_tick(self.tick)


def monotonic_ms() -> float:
    return time.perf_counter() * 1000.0
