"""Keccak-256 integrity checks for downloaded releases.

The release manifest publishes the original Keccak-256 digest, which differs
from the standardised SHA3-256 in ``hashlib``. pycryptodome provides the
original variant.
"""

from Crypto.Hash import keccak

from ..errors import HashMismatch


def new_hasher():
    return keccak.new(digest_bits=256)


def format_digest(hasher) -> str:
    return "0x" + hasher.hexdigest().lower()


def keccak256_hex(data: bytes) -> str:
    """Return ``0x`` followed by the lowercase hex Keccak-256 of ``data``."""
    hasher = new_hasher()
    hasher.update(data)
    return format_digest(hasher)


def check(actual: str, expected: str) -> None:
    # Byte-exact comparison; the manifest already uses lowercase hex.
    if actual != expected:
        raise HashMismatch(expected, actual)


def verify(data: bytes, expected: str) -> None:
    """Raise ``HashMismatch`` unless ``data`` hashes to ``expected``."""
    check(keccak256_hex(data), expected)
