"""
Error and warning types for the tokencss pipeline.

Only configuration problems surface as exceptions to callers. Everything the
pipeline can recover from is reported as a ``BuildWarning`` record instead.
"""

from __future__ import annotations

from enum import StrEnum


class TokenCssError(Exception):
    """Base exception for all tokencss errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DocumentParseError(TokenCssError):
    """
    Raised when an exported token document cannot be parsed.

    Examples:
    - Invalid JSON
    - Top-level value that is not an object
    - Unreadable file
    """

    def __init__(self, file_name: str, message: str):
        self.file_name = file_name
        super().__init__(f"{file_name}: {message}")


class ConfigError(TokenCssError):
    """Raised when tokencss.yaml is missing (when required) or invalid."""

    pass


class WarningKind(StrEnum):
    """Advisory conditions reported alongside the generated artifacts."""

    MISSING_MODE_VARIANT = "missing-mode-variant"
    IDENTICAL_VARIANTS = "identical-variants"
    MISSING_PRIMITIVE = "missing-primitive"
    STRUCTURAL_DRIFT = "structural-drift"
