from .errors import (
    ConfigError,
    ErgoboxError,
    ExportError,
    LayoutParseError,
    ProjectFileError,
    TemplateError,
)
from .logging import setup_logging


__all__ = [
    "setup_logging",
    "ErgoboxError",
    "LayoutParseError",
    "ProjectFileError",
    "ConfigError",
    "ExportError",
    "TemplateError",
]
