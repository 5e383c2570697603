"""Download, use and list compiler versions."""

import logging
from pathlib import Path
from typing import Callable, Dict, Any, Optional

from ..config import SolcvmConfig
from ..errors import VersionAlreadyDownloaded
from ..runtime.locator import StorageLocator
from ..utils.async_http import AsyncHTTPClient
from ..versions.activation import ActiveSlot
from ..versions.cache import CacheListing, VersionCache
from ..versions.download_manager import DownloadManager
from ..versions.manifest import ManifestClient
from ..versions.models import (
    ResolutionContext,
    ResolvedRelease,
    StorageLayout,
    VersionIdentifier,
    VersionToken,
)
from ..versions.resolver import parse_token, resolve_installed, resolve_release

logger = logging.getLogger(__name__)


class CompilerManager:
    """One invocation's worth of version management.

    Tokens are always validated before the storage root is located or the
    network is touched.
    """

    def __init__(self, config: Optional[SolcvmConfig] = None, locator: Optional[StorageLocator] = None,
                 progress_callback: Optional[Callable] = None):
        self.config = config or SolcvmConfig()
        self.locator = locator or StorageLocator(self.config)
        self.progress_callback = progress_callback
        self.http: Optional[AsyncHTTPClient] = None
        self._layout: Optional[StorageLayout] = None

    async def __aenter__(self):
        self.http = AsyncHTTPClient(timeout=self.config.request_timeout)
        await self.http.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self.http:
            await self.http.__aexit__(exc_type, exc, tb)
            self.http = None

    @property
    def layout(self) -> StorageLayout:
        if self._layout is None:
            self._layout = self.locator.layout()
        return self._layout

    @property
    def cache(self) -> VersionCache:
        return VersionCache(self.layout)

    @property
    def active_slot(self) -> ActiveSlot:
        return ActiveSlot(self.layout.active_slot_path, self.config.chunk_size)

    async def _resolve_remote(self, token: VersionToken) -> ResolvedRelease:
        async with ManifestClient(self.config, self.http) as client:
            manifest = await client.fetch()
        return resolve_release(token, manifest)

    async def _fetch(self, release: ResolvedRelease, dest: Path) -> Path:
        logger.info("Downloading version %s", release.version)
        async with DownloadManager(self.config, self.http) as downloader:
            await downloader.download_file(
                self.config.binary_url(release.release_file),
                dest,
                release.keccak256,
                self.progress_callback,
            )
        logger.info("Done.")
        return dest

    async def download(self, version: str, force: bool = False) -> Path:
        """Download and verify a release into the cache."""
        token = parse_token(version, ResolutionContext.DOWNLOAD)
        layout = self.layout
        release = await self._resolve_remote(token)

        dest = layout.cache_entry(release.release_file)
        if self.cache.has_entry(release.release_file) and not force:
            raise VersionAlreadyDownloaded(release.version, dest)
        return await self._fetch(release, dest)

    async def use(self, version: str) -> Path:
        """Activate an installed version."""
        token = parse_token(version, ResolutionContext.USE)
        cache = self.cache
        name = resolve_installed(token, cache.filenames())
        await self.active_slot.activate(cache.entry_path(name))

        loaded = VersionIdentifier.from_filename(name) or token.raw
        logger.info("Version %s loaded.", loaded)
        return cache.entry_path(name)

    def list_versions(self) -> CacheListing:
        return self.cache.list_versions()

    async def download_and_use_latest(self) -> Path:
        """Download the latest release if needed and activate it."""
        token = parse_token("latest", ResolutionContext.DOWNLOAD)
        layout = self.layout
        release = await self._resolve_remote(token)

        dest = layout.cache_entry(release.release_file)
        if self.cache.has_entry(release.release_file):
            logger.info("Version %s already downloaded.", release.version)
        else:
            await self._fetch(release, dest)

        await self.active_slot.activate(dest)
        logger.info("Version %s loaded.", release.version)
        return dest

    def status(self) -> Dict[str, Any]:
        layout = self.layout
        installed = sorted(CacheListing(layout.versions_dir))
        return {
            "root": str(layout.root),
            "active": str(layout.active_slot_path) if self.active_slot.exists() else None,
            "installed": [str(version) for version in installed],
        }
