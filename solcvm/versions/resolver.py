"""Resolve user version tokens against the manifest or the local cache.

Tokens are validated by ``parse_token`` before any network or filesystem
access happens.
"""

from pathlib import PurePosixPath
from typing import Iterable, List

from ..errors import (
    InvalidVersionToken,
    NoVersionsAvailable,
    VersionNotFound,
    VersionNotInstalled,
)
from .models import (
    VERSION_PATTERN,
    Manifest,
    ResolutionContext,
    ResolvedRelease,
    TokenKind,
    VersionIdentifier,
    VersionToken,
)

KEYWORDS = {
    ResolutionContext.DOWNLOAD: TokenKind.LATEST,
    ResolutionContext.USE: TokenKind.NEWEST,
}


def parse_token(raw: str, context: ResolutionContext) -> VersionToken:
    """Validate a version token for the given context."""
    if raw is None:
        raise InvalidVersionToken("", "Missing version number")
    token = raw.strip()
    keyword = KEYWORDS[context]
    if token == keyword.value:
        return VersionToken(keyword, token)
    if token in {kind.value for kind in KEYWORDS.values()}:
        raise InvalidVersionToken(token, f"'{token}' cannot be used to {context.value}")
    if not VERSION_PATTERN.fullmatch(token):
        raise InvalidVersionToken(token)
    return VersionToken(TokenKind.EXACT, token, VersionIdentifier.parse(token))


def resolve_release(token: VersionToken, manifest: Manifest) -> ResolvedRelease:
    """Map a download token to a release file and its expected hash."""
    if token.kind == TokenKind.LATEST:
        wanted = manifest.latestRelease
    elif token.kind == TokenKind.EXACT:
        wanted = token.raw
    else:
        raise InvalidVersionToken(token.raw, f"'{token.raw}' cannot be used to download")

    release_file = manifest.releases.get(wanted)
    if not release_file:
        raise VersionNotFound(wanted)
    if PurePosixPath(release_file).name != release_file or release_file in (".", ".."):
        raise VersionNotFound(wanted, f"unsafe release file name {release_file!r}")

    builds = manifest.builds_for(release_file)
    if len(builds) != 1:
        raise VersionNotFound(wanted, f"{len(builds)} build entries for {release_file}")
    expected_hash = builds[0].keccak256
    if not expected_hash:
        raise VersionNotFound(wanted, f"no keccak256 for {release_file}")

    return ResolvedRelease(version=wanted, release_file=release_file, keccak256=expected_hash)


def resolve_installed(token: VersionToken, filenames: Iterable[str]) -> str:
    """Pick the cache file name a use token refers to."""
    names = list(filenames)

    if token.kind == TokenKind.NEWEST:
        versioned = [(VersionIdentifier.from_filename(name), name) for name in names]
        versioned = [(version, name) for version, name in versioned if version is not None]
        if not versioned:
            raise NoVersionsAvailable()
        newest = max(version for version, _ in versioned)
        return min(name for version, name in versioned if version == newest)

    if token.kind != TokenKind.EXACT:
        raise InvalidVersionToken(token.raw, f"'{token.raw}' cannot be used to use")

    # Substring match: "0.8.1" also matches "soljson-v0.8.19+...". Among
    # several candidates an exact embedded version wins.
    candidates: List[str] = sorted(name for name in names if token.raw in name)
    if not candidates:
        raise VersionNotInstalled(token.raw)
    for name in candidates:
        if VersionIdentifier.from_filename(name) == token.version:
            return name
    return candidates[0]