"""Version management module."""

from .activation import ActiveSlot
from .cache import CacheListing, VersionCache
from .download_manager import DownloadManager
from .manifest import ManifestClient
from .models import BuildInfo, Manifest, StorageLayout, VersionIdentifier

__all__ = [
    "ActiveSlot",
    "BuildInfo",
    "CacheListing",
    "DownloadManager",
    "Manifest",
    "ManifestClient",
    "StorageLayout",
    "VersionCache",
    "VersionIdentifier",
]
