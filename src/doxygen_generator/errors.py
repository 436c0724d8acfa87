"""Exceptions for doxygen-generator.

Extraction, merging and rendering never raise for missing or malformed
source text; they return ``None`` or partially-filled models instead. These
exceptions cover the remaining failure modes (configuration).
"""

from __future__ import annotations


class DoxygenGeneratorError(Exception):
    """Base exception for doxygen-generator operations."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class ConfigError(DoxygenGeneratorError):
    """Raised when style options are missing or invalid."""

    pass
