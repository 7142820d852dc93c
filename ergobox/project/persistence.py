"""Loading and saving project documents."""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ergobox.core.errors import ProjectFileError
from ergobox.core.structlog_logger import get_struct_logger
from ergobox.layout.models import clamp_layer_index
from ergobox.project.models import PROJECT_VERSION, KeymapProject


logger = get_struct_logger(__name__)

DEFAULT_PROJECT_NAME = "keyboard-config.kb.json"


def _normalize_document(data: dict[str, Any]) -> dict[str, Any]:
    """Drop or repair the optional parts of a save document before validation."""
    document: dict[str, Any] = {"version": data["version"]}

    if isinstance(data.get("yaml"), str):
        document["yaml"] = data["yaml"]

    parsed = data.get("parsed")
    if isinstance(parsed, dict) and parsed.get("keys") and parsed.get("matrix"):
        document["parsed"] = {
            "keys": parsed["keys"],
            "matrix": parsed["matrix"],
            "warnings": parsed.get("warnings") or [],
            "bounds": parsed.get("bounds") or None,
        }

    layers = data.get("layers")
    if isinstance(layers, list) and layers:
        document["layers"] = layers
        defaults = data.get("defaultLayers")
        defaults = defaults if isinstance(defaults, dict) else {}
        document["defaultLayers"] = {
            dialect: clamp_layer_index(defaults.get(dialect, 0), layers)
            for dialect in ("zmk", "qmk")
        }

    unicode_settings = data.get("unicode")
    os_settings = (
        unicode_settings.get("os") if isinstance(unicode_settings, dict) else None
    )
    os_settings = os_settings if isinstance(os_settings, dict) else {}
    document["unicode"] = {
        "os": {"zmk": os_settings.get("zmk"), "qmk": os_settings.get("qmk")}
    }

    active_layer = data.get("activeLayer")
    if isinstance(active_layer, int) and not isinstance(active_layer, bool):
        document["activeLayer"] = clamp_layer_index(
            active_layer, document.get("layers", [None])
        )
    if isinstance(data.get("selectedKeyId"), str):
        document["selectedKeyId"] = data["selectedKeyId"]

    magic = data.get("magic")
    document["magic"] = {
        "holdLetters": magic.get("holdLetters") if isinstance(magic, dict) else None
    }
    return document


def parse_project(text: str, source: str = "<string>") -> KeymapProject:
    """Parse a save document.

    Raises:
        ProjectFileError: If the text is not JSON, not an object, has an
            unsupported version or fails validation
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ProjectFileError(
            f"Invalid save file {source}: {e}", context={"source": source}
        ) from e

    if not isinstance(data, dict):
        raise ProjectFileError(f"Invalid save file {source}", context={"source": source})
    version = data.get("version")
    if isinstance(version, bool) or version != PROJECT_VERSION:
        raise ProjectFileError(
            f"Unsupported save file version in {source}: {data.get('version')!r}",
            context={"source": source, "version": data.get("version")},
        )

    try:
        project = KeymapProject.model_validate(_normalize_document(data))
    except ValidationError as e:
        raise ProjectFileError(
            f"Invalid save file {source}: {e}", context={"source": source}
        ) from e

    logger.debug(
        "project_parsed",
        source=source,
        layers=len(project.layers),
        keys=len(project.parsed.keys) if project.parsed else 0,
    )
    return project


def load_project(path: str | Path) -> KeymapProject:
    """Load a project file from disk."""
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ProjectFileError(
            f"Cannot read save file {file_path}: {e}", context={"path": str(file_path)}
        ) from e
    return parse_project(text, str(file_path))


def dump_project(project: KeymapProject) -> str:
    return json.dumps(project.to_dict_full(), indent=2, ensure_ascii=False)


def save_project(project: KeymapProject, path: str | Path) -> Path:
    """Write a project file, creating parent directories as needed."""
    file_path = Path(path)
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(dump_project(project) + "\n", encoding="utf-8")
    except OSError as e:
        raise ProjectFileError(
            f"Cannot write save file {file_path}: {e}", context={"path": str(file_path)}
        ) from e
    logger.info("project_saved", path=str(file_path), layers=len(project.layers))
    return file_path
