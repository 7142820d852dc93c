"""Keymap projects: the save document and the edits applied to it."""

from ergobox.project.models import (
    PROJECT_VERSION,
    DefaultLayers,
    KeymapProject,
    MagicSettings,
    UnicodeOsSettings,
    UnicodeSettings,
)
from ergobox.project.persistence import (
    DEFAULT_PROJECT_NAME,
    dump_project,
    load_project,
    parse_project,
    save_project,
)
from ergobox.project.service import (
    ProjectService,
    clear_binding,
    create_project_service,
)


__all__ = [
    "PROJECT_VERSION",
    "DEFAULT_PROJECT_NAME",
    "DefaultLayers",
    "KeymapProject",
    "MagicSettings",
    "UnicodeOsSettings",
    "UnicodeSettings",
    "ProjectService",
    "clear_binding",
    "create_project_service",
    "dump_project",
    "load_project",
    "parse_project",
    "save_project",
]
