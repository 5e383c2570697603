"""Local cache of downloaded compiler releases."""

from pathlib import Path
from typing import Iterator, List

from ..errors import NoVersionsAvailable
from .models import StorageLayout, VersionIdentifier


class CacheListing:
    """Lazy, restartable view of the versions present in a cache directory.

    Each iteration rescans the directory and yields versions in directory
    enumeration order, which is unsorted. Sort explicitly when order matters.
    """

    def __init__(self, versions_dir: Path):
        self.versions_dir = versions_dir

    def __iter__(self) -> Iterator[VersionIdentifier]:
        for name in iter_filenames(self.versions_dir):
            version = VersionIdentifier.from_filename(name)
            if version is not None:
                yield version

    def is_empty(self) -> bool:
        return next(iter(self), None) is None


def iter_filenames(versions_dir: Path) -> Iterator[str]:
    if not versions_dir.is_dir():
        return
    for item in versions_dir.iterdir():
        if item.is_file():
            yield item.name


class VersionCache:
    def __init__(self, layout: StorageLayout):
        self.layout = layout

    @property
    def versions_dir(self) -> Path:
        return self.layout.versions_dir

    def filenames(self) -> List[str]:
        """Names of all files in the cache directory."""
        return list(iter_filenames(self.versions_dir))

    def entry_path(self, name: str) -> Path:
        return self.layout.cache_entry(name)

    def has_entry(self, name: str) -> bool:
        return self.entry_path(name).is_file()

    def list_versions(self) -> CacheListing:
        """List installed versions, raising when there are none."""
        listing = CacheListing(self.versions_dir)
        if listing.is_empty():
            raise NoVersionsAvailable(self.versions_dir)
        return listing
