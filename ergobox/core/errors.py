"""Exception hierarchy for Ergobox."""

from typing import Any


class ErgoboxError(Exception):
    """Base exception for all Ergobox errors.

    Args:
        message: Human readable description of the failure
        context: Optional structured details (file paths, offending values)
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}

    def __str__(self) -> str:
        return self.message


class LayoutParseError(ErgoboxError):
    """Raised when a layout document cannot be deserialized or is not a mapping."""


class ProjectFileError(ErgoboxError):
    """Raised when a project save file is malformed or has an unsupported version."""


class ConfigError(ErgoboxError):
    """Raised when user configuration or the key registry cannot be loaded."""


class ExportError(ErgoboxError):
    """Raised when firmware artifacts cannot be generated or written."""


class TemplateError(ExportError):
    """Raised when a firmware source template cannot be loaded or rendered."""
