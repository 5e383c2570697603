"""Tests for the local version cache."""

import pytest

from solcvm.errors import NoVersionsAvailable
from solcvm.versions.cache import VersionCache
from solcvm.versions.models import StorageLayout, VersionIdentifier


@pytest.fixture
def cache(tmp_path):
    return VersionCache(StorageLayout(tmp_path))


def add_entry(cache, name, content=b"x"):
    cache.versions_dir.mkdir(parents=True, exist_ok=True)
    path = cache.entry_path(name)
    path.write_bytes(content)
    return path


def test_missing_cache_dir_has_no_versions(cache):
    with pytest.raises(NoVersionsAvailable):
        cache.list_versions()


def test_empty_cache_dir_has_no_versions(cache):
    cache.versions_dir.mkdir()
    with pytest.raises(NoVersionsAvailable):
        cache.list_versions()


def test_unrecognised_files_do_not_count(cache):
    add_entry(cache, "notes.txt")
    with pytest.raises(NoVersionsAvailable):
        cache.list_versions()


def test_list_versions(cache):
    add_entry(cache, "soljson-v0.8.2+commit.661d1103.js")
    add_entry(cache, "soljson-v0.8.10+commit.fc410830.js")
    add_entry(cache, "README")
    (cache.versions_dir / "soljson-v0.9.0.d").mkdir()

    listing = cache.list_versions()
    # Directory enumeration order is unspecified; compare sorted.
    assert sorted(listing) == [VersionIdentifier(0, 8, 2), VersionIdentifier(0, 8, 10)]


def test_listing_is_restartable(cache):
    add_entry(cache, "soljson-v0.8.2+commit.661d1103.js")
    listing = cache.list_versions()
    assert list(listing) == [VersionIdentifier(0, 8, 2)]

    add_entry(cache, "soljson-v0.8.3+commit.8d00100c.js")
    assert sorted(listing) == [VersionIdentifier(0, 8, 2), VersionIdentifier(0, 8, 3)]
    assert sorted(listing) == sorted(listing)


def test_filenames_and_entries(cache):
    path = add_entry(cache, "soljson-v0.8.2+commit.661d1103.js")
    assert cache.filenames() == [path.name]
    assert cache.has_entry(path.name)
    assert not cache.has_entry("soljson-v0.8.3+commit.8d00100c.js")
