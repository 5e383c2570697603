"""Async HTTP client utilities."""

import asyncio
import json
import aiohttp
from typing import Optional, Dict, Any, AsyncIterator

from ..errors import NetworkError, ParseError


class AsyncHTTPClient:
    """Reusable async HTTP client.

    Every transport failure surfaces as ``NetworkError``; undecodable JSON
    bodies surface as ``ParseError``.
    """

    def __init__(self, headers: Optional[Dict[str, str]] = None, timeout: float = 300.0):
        self.default_headers = headers or {}
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(headers=self.default_headers, timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self.session:
            await self.session.close()

    def _ensure_session(self) -> aiohttp.ClientSession:
        if not self.session:
            self.session = aiohttp.ClientSession(headers=self.default_headers, timeout=self.timeout)
        return self.session

    async def get_json(self, url: str) -> Any:
        """GET a JSON document."""
        session = self._ensure_session()
        try:
            async with session.get(url) as resp:
                if resp.status < 200 or resp.status >= 300:
                    raise NetworkError(url, status=resp.status)
                body = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(url, reason=str(e) or type(e).__name__) from e

        try:
            return json.loads(body)
        except ValueError as e:
            raise ParseError(f"Response from {url} is not valid JSON: {e}") from e

    async def stream(self, url: str, chunk_size: int = 64 * 1024) -> AsyncIterator[tuple]:
        """GET a binary body, yielding ``(chunk, total_size)`` pairs."""
        session = self._ensure_session()
        try:
            async with session.get(url) as resp:
                if resp.status < 200 or resp.status >= 300:
                    raise NetworkError(url, status=resp.status)
                total_size = int(resp.headers.get('Content-Length', 0))
                async for chunk_data in resp.content.iter_chunked(chunk_size):
                    yield chunk_data, total_size
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(url, reason=str(e) or type(e).__name__) from e
