"""Runtime configuration."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError

DEFAULT_MANIFEST_URL = "https://binaries.soliditylang.org/bin/list.json"
DEFAULT_BINARY_BASE_URL = "https://binaries.soliditylang.org/bin/"


class SolcvmConfig(BaseModel):
    manifest_url: str = DEFAULT_MANIFEST_URL
    binary_base_url: str = DEFAULT_BINARY_BASE_URL
    storage_root: Optional[Path] = None
    package_name: str = "solc"
    chunk_size: int = Field(64 * 1024, gt=0)
    request_timeout: float = Field(300.0, gt=0)

    @classmethod
    def from_env(cls, **overrides) -> "SolcvmConfig":
        """Build a config from SOLCVM_* environment variables.

        Keyword overrides that are not None win over the environment.
        """
        values = {}
        env_map = {
            "SOLCVM_MANIFEST_URL": "manifest_url",
            "SOLCVM_BINARY_BASE_URL": "binary_base_url",
            "SOLCVM_HOME": "storage_root",
            "SOLCVM_CHUNK_SIZE": "chunk_size",
            "SOLCVM_TIMEOUT": "request_timeout",
        }
        for env_name, field in env_map.items():
            raw = os.environ.get(env_name)
            if raw:
                values[field] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def binary_url(self, release_file: str) -> str:
        """URL of a release file under the binary base URL."""
        return self.binary_base_url.rstrip("/") + "/" + release_file
