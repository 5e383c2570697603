"""Logging setup."""

import logging
from pathlib import Path
from typing import Optional


def setup_logging(verbose: bool = False, log_dir: Optional[Path] = None):
    """Setup logging configuration."""
    log_dir = log_dir or (Path.home() / ".cache" / "solcvm")
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # File handler
    file_handler = logging.FileHandler(log_dir / "solcvm.log")
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    file_handler.setFormatter(file_formatter)
    logger.addHandler(file_handler)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_formatter = logging.Formatter('%(levelname)s: %(message)s')
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)
