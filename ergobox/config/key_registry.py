"""Key registry loading from YAML."""

from importlib import resources
from pathlib import Path

import yaml
from pydantic import ValidationError

from ergobox.bindings.registry import KeyGroup, KeyRegistry
from ergobox.core.errors import ConfigError
from ergobox.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)

DEFAULT_REGISTRY_RESOURCE = "key_registry.yaml"


def _read_registry_text(path: Path | None) -> tuple[str, str]:
    if path is None:
        resource = resources.files("ergobox.config.data") / DEFAULT_REGISTRY_RESOURCE
        return resource.read_text(encoding="utf-8"), DEFAULT_REGISTRY_RESOURCE
    try:
        return Path(path).read_text(encoding="utf-8"), str(path)
    except OSError as e:
        raise ConfigError(
            f"Cannot read key registry {path}: {e}", context={"path": str(path)}
        ) from e


def parse_key_registry(text: str, source: str = "<string>") -> KeyRegistry:
    """Build a registry from YAML text holding a ``groups`` list."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Failed to parse key registry {source}: {e}", context={"source": source}
        ) from e

    groups = data.get("groups") if isinstance(data, dict) else None
    if not isinstance(groups, list):
        raise ConfigError(
            f"Key registry {source} must contain a 'groups' list",
            context={"source": source},
        )
    try:
        registry = KeyRegistry(KeyGroup.model_validate(group) for group in groups)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid key registry {source}: {e}", context={"source": source}
        ) from e

    logger.debug("key_registry_loaded", source=source, items=len(registry))
    return registry


def load_key_registry(path: str | Path | None = None) -> KeyRegistry:
    """Load the key registry from ``path`` or the bundled default."""
    text, source = _read_registry_text(Path(path) if path else None)
    return parse_key_registry(text, source)
