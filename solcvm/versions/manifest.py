"""Remote release manifest client."""

import logging
from typing import Optional

from pydantic import ValidationError

from ..config import SolcvmConfig
from ..errors import ParseError
from ..utils.async_http import AsyncHTTPClient
from .models import Manifest

logger = logging.getLogger(__name__)


class ManifestClient:
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

    async def fetch(self) -> Manifest:
        """Fetch the release manifest."""
        if self.http is None:
            raise RuntimeError("ManifestClient used outside of 'async with'")

        logger.info("Retrieving available version list...")
        data = await self.http.get_json(self.config.manifest_url)
        if not isinstance(data, dict):
            raise ParseError(f"Manifest at {self.config.manifest_url} is not a JSON object")
        try:
            manifest = Manifest.model_validate(data)
        except ValidationError as e:
            raise ParseError(f"Manifest at {self.config.manifest_url} has an unexpected shape: {e}") from e

        logger.debug("Manifest lists %d releases, latest %s", len(manifest.releases), manifest.latestRelease)
        return manifest
