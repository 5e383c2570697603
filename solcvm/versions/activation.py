"""The active compiler slot.

Activation deletes the current slot file and copies a cache entry in its
place. It is not atomic: a concurrent reader may see the slot missing or
half-written, and two invocations racing on the slot are not synchronised.
The tool assumes a single user running one command at a time.
"""

import logging
from pathlib import Path

import aiofiles
import aiofiles.os

from ..errors import CopyError

logger = logging.getLogger(__name__)


class ActiveSlot:
    def __init__(self, path: Path, chunk_size: int = 64 * 1024):
        self.path = path
        self.chunk_size = chunk_size

    def exists(self) -> bool:
        return self.path.is_file()

    async def activate(self, cache_entry: Path) -> Path:
        """Replace the slot's content with a copy of ``cache_entry``."""
        if not cache_entry.is_file():
            raise CopyError(f"Cache entry {cache_entry} does not exist")

        if await aiofiles.os.path.exists(self.path):
            try:
                await aiofiles.os.remove(self.path)
            except OSError as e:
                raise CopyError(f"Could not remove active compiler {self.path}: {e}") from e

        try:
            async with aiofiles.open(cache_entry, 'rb') as src, aiofiles.open(self.path, 'wb') as dst:
                while chunk := await src.read(self.chunk_size):
                    await dst.write(chunk)
        except OSError as e:
            # The slot may be left partial; there is no rollback.
            raise CopyError(f"Could not copy {cache_entry} to {self.path}: {e}") from e

        logger.debug("Copied %s to %s", cache_entry, self.path)
        return self.path
