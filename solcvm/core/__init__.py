"""Command orchestration."""

from .compiler_manager import CompilerManager

__all__ = ["CompilerManager"]
