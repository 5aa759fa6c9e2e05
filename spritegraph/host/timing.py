"""asyncio frame timer."""

import asyncio
from typing import Optional

from spritegraph.types import TickCallback


DEFAULT_TICK_INTERVAL = 1 / 60


class AsyncioFrameTimer:
    """Runs each scheduled tick ``interval`` seconds later on an event loop.

    The loop defaults to the one running when the first tick is scheduled.
    After :meth:`close` no further ticks are scheduled.
    """

    def __init__(
        self,
        interval: float = DEFAULT_TICK_INTERVAL,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self.interval = interval
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self.closed = False

    def schedule_next_tick(self, callback: TickCallback) -> None:
        if self.closed:
            return
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._handle = self._loop.call_later(self.interval, callback)

    def close(self) -> None:
        self.closed = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
