"""Shared fixtures: a local release server and storage roots."""

import asyncio
import json
from pathlib import Path
from typing import Dict, Optional

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from solcvm.config import SolcvmConfig
from solcvm.versions.integrity import keccak256_hex


def release_file_name(version: str) -> str:
    return f"soljson-v{version}+commit.0123abcd.js"


class ReleaseServer:
    """Serves ``list.json`` and release files like the real binaries host."""

    def __init__(self):
        self.files: Dict[str, bytes] = {}
        self.hashes: Dict[str, str] = {}
        self.releases: Dict[str, str] = {}
        self.latest: Optional[str] = None
        self.manifest_body: Optional[bytes] = None
        self.manifest_status = 200
        self.hang: Dict[str, asyncio.Event] = {}
        self.requests = []
        self.base_url = ""
        self.manifest_url = ""

        self.app = web.Application()
        self.app.router.add_get("/bin/list.json", self._manifest)
        self.app.router.add_get("/bin/{name}", self._file)

    def add_release(self, version: str, payload: bytes, keccak256: Optional[str] = None,
                    latest: bool = False, hang: bool = False) -> str:
        name = release_file_name(version)
        self.files[name] = payload
        self.hashes[name] = keccak256 or keccak256_hex(payload)
        self.releases[version] = name
        if latest or self.latest is None:
            self.latest = version
        if hang:
            self.hang[name] = asyncio.Event()
        return name

    def manifest(self) -> dict:
        return {
            "builds": [
                {
                    "path": name,
                    "version": version,
                    "build": "commit.0123abcd",
                    "longVersion": f"{version}+commit.0123abcd",
                    "keccak256": self.hashes[name],
                    "sha256": "0x" + "0" * 64,
                    "urls": [f"bzzr://{'0' * 64}"],
                }
                for version, name in self.releases.items()
            ],
            "releases": dict(self.releases),
            "latestRelease": self.latest,
        }

    def config(self, root: Path, **overrides) -> SolcvmConfig:
        return SolcvmConfig(
            manifest_url=self.manifest_url,
            binary_base_url=self.base_url,
            storage_root=root,
            **overrides,
        )

    def release_all(self):
        for event in self.hang.values():
            event.set()

    async def _manifest(self, request: web.Request) -> web.StreamResponse:
        self.requests.append(request.path)
        if self.manifest_status != 200:
            return web.Response(status=self.manifest_status)
        body = self.manifest_body if self.manifest_body is not None else json.dumps(self.manifest()).encode()
        return web.Response(body=body, content_type="application/json")

    async def _file(self, request: web.Request) -> web.StreamResponse:
        name = request.match_info["name"]
        self.requests.append(request.path)
        if name not in self.files:
            raise web.HTTPNotFound()
        payload = self.files[name]
        if name not in self.hang:
            return web.Response(body=payload, content_type="application/javascript")

        # Send half the body, then stall until released.
        resp = web.StreamResponse()
        resp.content_length = len(payload)
        await resp.prepare(request)
        await resp.write(payload[: len(payload) // 2])
        await self.hang[name].wait()
        try:
            await resp.write(payload[len(payload) // 2:])
        except ConnectionResetError:
            pass
        return resp


@pytest_asyncio.fixture
async def release_server():
    server = ReleaseServer()
    test_server = TestServer(server.app)
    await test_server.start_server()
    server.base_url = str(test_server.make_url("/bin/"))
    server.manifest_url = str(test_server.make_url("/bin/list.json"))
    try:
        yield server
    finally:
        server.release_all()
        await test_server.close()


@pytest.fixture
def storage_root(tmp_path) -> Path:
    root = tmp_path / "solc"
    root.mkdir()
    return root


@pytest.fixture
def payload_factory():
    def make(version: str) -> bytes:
        return (f"/* soljson {version} */\n" + "var Module = {};\n" * 4096).encode()
    return make
