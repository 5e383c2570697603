"""Error types raised by the version manager.

Every error is terminal for the current invocation. The CLI maps each class
to its own non-zero exit status through ``exit_code``.
"""

from typing import Optional


class SolcvmError(Exception):
    """Base class for all version manager failures."""
    exit_code = 1


class InvalidVersionToken(SolcvmError):
    exit_code = 2

    def __init__(self, token: str, reason: str = "Invalid version number"):
        self.token = token
        super().__init__(f"{reason}: {token!r}")


class NetworkError(SolcvmError):
    exit_code = 3

    def __init__(self, url: str, status: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status = status
        if status is not None:
            message = f"Error downloading file: {status} ({url})"
        else:
            message = f"Error downloading file: {reason or 'transport failure'} ({url})"
        super().__init__(message)


class ParseError(SolcvmError):
    exit_code = 4


class VersionNotFound(SolcvmError):
    """Version absent from (or inconsistent in) the remote manifest."""
    exit_code = 5

    def __init__(self, version: str, detail: str = ""):
        self.version = version
        message = f"Version not found: {version}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class VersionNotInstalled(SolcvmError):
    exit_code = 6

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Version {version} not found. Please download first")


class NoVersionsAvailable(SolcvmError):
    exit_code = 7

    def __init__(self, directory=None):
        self.directory = directory
        super().__init__("No versions downloaded. Please download first")


class HashMismatch(SolcvmError):
    exit_code = 8

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Hash mismatch: {expected} vs {actual}")


class CopyError(SolcvmError):
    exit_code = 9


class StorageNotFound(SolcvmError):
    exit_code = 10


class VersionAlreadyDownloaded(SolcvmError):
    exit_code = 11

    def __init__(self, version: str, path=None):
        self.version = version
        self.path = path
        super().__init__(f"Version {version} already downloaded.")


class CleanupError(SolcvmError):
    """Removing a partial or corrupt file failed after another error."""
    exit_code = 12


class ConfigError(SolcvmError):
    exit_code = 13
