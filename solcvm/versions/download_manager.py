"""Download manager for compiler releases."""

import logging
from contextlib import aclosing, contextmanager
from pathlib import Path
from typing import Callable, Optional

import aiofiles

from ..config import SolcvmConfig
from ..errors import CleanupError
from ..utils.async_http import AsyncHTTPClient
from . import integrity

logger = logging.getLogger(__name__)


@contextmanager
def partial_file(dest: Path):
    """Remove ``dest`` if the block exits with any exception.

    Covers network errors, hash mismatches and cancellation (Ctrl-C cancels
    the running task). Removal happens before the exception propagates. A
    failed removal raises ``CleanupError`` chained to the original error.
    """
    try:
        yield dest
    except BaseException as primary:
        try:
            dest.unlink(missing_ok=True)
        except OSError as e:
            raise CleanupError(f"Could not remove partial file {dest}: {e}") from primary
        logger.info("Removed incomplete file %s", dest.name)
        raise


class DownloadManager:
    def __init__(self, config: Optional[SolcvmConfig] = None, http: Optional[AsyncHTTPClient] = None):
        self.config = config or SolcvmConfig()
        self.http = http
        self._owns_http = http is None

    async def __aenter__(self):
        if self.http is None:
            self.http = AsyncHTTPClient(timeout=self.config.request_timeout)
            await self.http.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._owns_http and self.http:
            await self.http.__aexit__(exc_type, exc, tb)
            self.http = None

    async def download_file(self, url: str, dest: Path, expected_keccak256: Optional[str] = None,
                            progress_callback: Optional[Callable] = None) -> Path:
        """Download a file with optional Keccak-256 verification.

        Any existing file at ``dest`` is replaced. On failure nothing is left
        at ``dest``.
        """
        if self.http is None:
            raise RuntimeError("DownloadManager used outside of 'async with'")

        dest.parent.mkdir(parents=True, exist_ok=True)
        # Remove if existing
        try:
            dest.unlink(missing_ok=True)
        except OSError as e:
            raise CleanupError(f"Could not remove existing file {dest}: {e}") from e

        hasher = integrity.new_hasher()
        downloaded = 0
        with partial_file(dest):
            async with aiofiles.open(dest, 'wb') as f:
                async with aclosing(self.http.stream(url, self.config.chunk_size)) as chunks:
                    async for chunk_data, total_size in chunks:
                        await f.write(chunk_data)
                        hasher.update(chunk_data)
                        downloaded += len(chunk_data)
                        if progress_callback:
                            await progress_callback(dest.name, downloaded, total_size)

            if expected_keccak256:
                integrity.check(integrity.format_digest(hasher), expected_keccak256)

        logger.debug("Wrote %d bytes to %s", downloaded, dest)
        return dest
