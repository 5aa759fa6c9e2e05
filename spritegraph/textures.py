"""Append-only texture table.

Decoded images are addressed by integer handle (their index in the table) and
deduplicated by source identifier. Entries are never removed; the table lives
as long as the renderer that owns it.

Loads are coroutines. Concurrent loads of a source that is still decoding
share a single decode task, so the decode service sees each source at most
once.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from spritegraph.types import DecodeService, TextureHandle


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Texture:
    """Table entry.

    Attributes:
        handle: Index of this entry in the table.
        source: Source identifier the entry was decoded from.
        pixels: Opaque decoded payload handed to the draw surface.
        width: Pixel width.
        height: Pixel height.
    """

    handle: TextureHandle
    source: str
    pixels: Any
    width: int
    height: int


class TextureTable:
    def __init__(self, decoder: DecodeService) -> None:
        self._decoder = decoder
        self._entries: List[Texture] = []
        self._by_source: Dict[str, TextureHandle] = {}
        self._pending: Dict[str, "asyncio.Task[TextureHandle]"] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Texture]:
        return iter(self._entries)

    def __getitem__(self, handle: TextureHandle) -> Texture:
        if not 0 <= handle < len(self._entries):
            raise KeyError(f"Unknown texture handle: {handle}")
        return self._entries[handle]

    def find(self, source: str) -> Optional[TextureHandle]:
        """Return the handle already loaded for ``source``, if any."""
        return self._by_source.get(source)

    async def load(self, source: str) -> TextureHandle:
        """Return the handle for ``source``, decoding it on first reference.

        Raises:
            Whatever the decode service raises; the failed source is not
            cached and a later call retries.
        """
        handle = self._by_source.get(source)
        if handle is not None:
            logger.debug("Texture %r already loaded as %d", source, handle)
            return handle

        task = self._pending.get(source)
        if task is None:
            task = asyncio.ensure_future(self._decode(source))
            self._pending[source] = task
        else:
            logger.debug("Texture %r is decoding; joining pending load", source)
        return await asyncio.shield(task)

    async def _decode(self, source: str) -> TextureHandle:
        try:
            decoded = await self._decoder.decode(source)
        except Exception:
            logger.warning("Failed to decode texture %r", source)
            raise
        finally:
            self._pending.pop(source, None)

        handle = len(self._entries)
        self._entries.append(
            Texture(
                handle=handle,
                source=source,
                pixels=decoded.pixels,
                width=decoded.width,
                height=decoded.height,
            )
        )
        self._by_source[source] = handle
        logger.debug(
            "Loaded texture %r as %d (%dx%d)",
            source,
            handle,
            decoded.width,
            decoded.height,
        )
        return handle
