"""Tests for the manifest client."""

import pytest

from solcvm.config import SolcvmConfig
from solcvm.errors import NetworkError, ParseError
from solcvm.versions.manifest import ManifestClient


@pytest.mark.asyncio
async def test_fetch_manifest(release_server, storage_root):
    release_server.add_release("0.8.18", b"a")
    release_server.add_release("0.8.19", b"b", latest=True)

    async with ManifestClient(release_server.config(storage_root)) as client:
        manifest = await client.fetch()

    assert manifest.latestRelease == "0.8.19"
    assert set(manifest.releases) == {"0.8.18", "0.8.19"}
    assert manifest.builds[0].keccak256.startswith("0x")


@pytest.mark.asyncio
async def test_non_success_status(release_server, storage_root):
    release_server.manifest_status = 503

    async with ManifestClient(release_server.config(storage_root)) as client:
        with pytest.raises(NetworkError) as excinfo:
            await client.fetch()
    assert excinfo.value.status == 503


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [
    b"<html>",
    b"[1, 2, 3]",
    b'{"latestRelease": "0.8.19"}',
    b'{"latestRelease": "0.8.19", "releases": ["0.8.19"], "builds": {"path": "a.js"}}',
])
async def test_malformed_manifest(release_server, storage_root, body):
    release_server.manifest_body = body

    async with ManifestClient(release_server.config(storage_root)) as client:
        with pytest.raises(ParseError):
            await client.fetch()


@pytest.mark.asyncio
async def test_unreachable_host():
    config = SolcvmConfig(manifest_url="http://127.0.0.1:1/bin/list.json", request_timeout=5)
    async with ManifestClient(config) as client:
        with pytest.raises(NetworkError):
            await client.fetch()
