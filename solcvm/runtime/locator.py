"""Locate the storage root that holds cached releases and the active slot."""

import logging
import subprocess
from pathlib import Path
from typing import Iterator, Optional

from ..config import SolcvmConfig
from ..errors import StorageNotFound
from ..versions.models import StorageLayout

logger = logging.getLogger(__name__)


class StorageLocator:
    def __init__(self, config: Optional[SolcvmConfig] = None, cwd: Optional[Path] = None):
        self.config = config or SolcvmConfig()
        self.cwd = cwd or Path.cwd()

    def get_npm_global_root(self) -> Optional[Path]:
        """Ask npm for its global package directory."""
        try:
            result = subprocess.run(["npm", "root", "-g"], capture_output=True, text=True, timeout=30)
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("npm root -g failed: %s", e)
            return None
        if result.returncode != 0 or not result.stdout.strip():
            return None
        return Path(result.stdout.strip())

    def iter_candidates(self) -> Iterator[Path]:
        """Package directories to probe, nearest first."""
        for base in [self.cwd, *self.cwd.parents]:
            yield base / "node_modules" / self.config.package_name

        global_root = self.get_npm_global_root()
        if global_root:
            yield global_root / self.config.package_name

    def locate(self) -> Path:
        """Return the storage root, or raise ``StorageNotFound``."""
        if self.config.storage_root is not None:
            root = Path(self.config.storage_root).expanduser()
            try:
                root.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StorageNotFound(f"Storage root {root} is not usable: {e}") from e
            if not root.is_dir():
                raise StorageNotFound(f"Storage root {root} is not a directory")
            return root.resolve()

        for candidate in self.iter_candidates():
            if candidate.is_dir():
                logger.debug("Using package directory %s", candidate)
                return candidate.resolve()

        raise StorageNotFound(
            f"Could not find an installation of '{self.config.package_name}'; "
            f"pass --root or set SOLCVM_HOME"
        )

    def layout(self) -> StorageLayout:
        return StorageLayout(self.locate())
