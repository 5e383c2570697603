"""Data models for compiler releases."""

import re
from enum import Enum
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional

from pydantic import BaseModel

VERSION_PATTERN = re.compile(r"(\d+)\.(\d+)\.(\d+)")


class VersionIdentifier(NamedTuple):
    """A ``major.minor.patch`` triple, ordered numerically."""
    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> "VersionIdentifier":
        match = VERSION_PATTERN.fullmatch(text)
        if not match:
            raise ValueError(f"not a major.minor.patch version: {text!r}")
        return cls(*(int(part) for part in match.groups()))

    @classmethod
    def from_filename(cls, name: str) -> Optional["VersionIdentifier"]:
        """Extract the first embedded version from a file name, if any."""
        match = VERSION_PATTERN.search(name)
        if not match:
            return None
        return cls(*(int(part) for part in match.groups()))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class BuildInfo(BaseModel):
    path: str
    keccak256: Optional[str] = None
    version: Optional[str] = None
    build: Optional[str] = None
    longVersion: Optional[str] = None
    sha256: Optional[str] = None
    urls: Optional[List[str]] = None


class Manifest(BaseModel):
    """Parsed ``list.json`` release index."""
    latestRelease: str
    releases: Dict[str, str]
    builds: List[BuildInfo]

    def builds_for(self, release_file: str) -> List[BuildInfo]:
        return [build for build in self.builds if build.path == release_file]


class TokenKind(str, Enum):
    EXACT = "exact"
    LATEST = "latest"
    NEWEST = "newest"


class ResolutionContext(str, Enum):
    DOWNLOAD = "download"
    USE = "use"


class VersionToken(NamedTuple):
    kind: TokenKind
    raw: str
    version: Optional[VersionIdentifier] = None


class ResolvedRelease(BaseModel):
    version: str
    release_file: str
    keccak256: str


class StorageLayout(NamedTuple):
    """Paths derived from a resolved storage root."""
    root: Path

    @property
    def versions_dir(self) -> Path:
        return self.root / "versions"

    @property
    def active_slot_path(self) -> Path:
        return self.root / "soljson.js"

    def cache_entry(self, release_file: str) -> Path:
        return self.versions_dir / release_file
