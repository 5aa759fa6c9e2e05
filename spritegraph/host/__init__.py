from spritegraph.scheduler import monotonic_ms

from .pillow import PillowDecoder, PillowSurface, pillow_renderer
from .timing import AsyncioFrameTimer

__all__ = [
    "AsyncioFrameTimer",
    "PillowDecoder",
    "PillowSurface",
    "monotonic_ms",
    "pillow_renderer",
]
