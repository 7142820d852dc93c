"""
User configuration management for Ergobox.

This module handles user-specific configuration settings with multiple sources:
1. Environment variables (highest precedence)
2. Command-line provided config file
3. Config file in current directory
4. User's XDG config directory
5. Default values (lowest precedence)
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ergobox.config.models import UserConfigData
from ergobox.core.errors import ConfigError


logger = logging.getLogger(__name__)

ENV_PREFIX = "ERGOBOX_"


class UserConfig:
    """
    Manages user-specific configuration for Ergobox using Pydantic Settings.

    The first config file found in the search path is loaded with PyYAML and
    passed to ``UserConfigData``; environment variables override its values.
    """

    def __init__(self, cli_config_path: str | Path | None = None):
        """
        Initialize the user configuration handler.

        Args:
            cli_config_path: Optional config file path provided via CLI
        """
        self._config_sources: dict[str, str] = {}
        self._main_config_path: Path | None = None
        self._config_paths = self._generate_config_paths(cli_config_path)
        self._load_config()

    @property
    def config(self) -> UserConfigData:
        return self._config

    @property
    def config_paths(self) -> list[Path]:
        return list(self._config_paths)

    @property
    def main_config_path(self) -> Path | None:
        return self._main_config_path

    def _generate_config_paths(self, cli_config_path: str | Path | None) -> list[Path]:
        """Generate a list of config paths to search in order of precedence."""
        config_paths = []

        if cli_config_path:
            config_paths.append(Path(cli_config_path).expanduser().resolve())

        config_paths.append(Path.cwd() / "ergobox.yaml")

        xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config_home:
            config_paths.append(Path(xdg_config_home) / "ergobox" / "config.yaml")
        else:
            config_paths.append(Path.home() / ".config" / "ergobox" / "config.yaml")

        return config_paths

    def _read_config_file(self, path: Path) -> dict[str, Any]:
        try:
            content = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(
                f"Failed to read config file {path}: {e}", context={"path": str(path)}
            ) from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigError(
                f"Config file {path} must contain a mapping",
                context={"path": str(path)},
            )
        return content

    def _load_config(self) -> None:
        """Load configuration from the first config file found and the environment."""
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Config search paths: %s", [str(p) for p in self._config_paths]
            )

        config_data: dict[str, Any] = {}
        found_path = next((path for path in self._config_paths if path.is_file()), None)
        if found_path:
            config_data = self._read_config_file(found_path)
            self._main_config_path = found_path
            self._track_file_sources(config_data, found_path.name)
            logger.debug("Loaded user configuration from %s", found_path)
        else:
            logger.info(
                "No user configuration files found. Using defaults with environment variables."
            )

        try:
            self._config = UserConfigData(**config_data)
        except ValidationError as e:
            source = str(found_path) if found_path else "environment"
            raise ConfigError(
                f"Invalid configuration in {source}: {e}", context={"source": source}
            ) from e

        self._track_env_var_sources()

    def _track_file_sources(self, data: dict[str, Any], filename: str) -> None:
        for key in data:
            self._config_sources[str(key)] = f"file:{filename}"

    def _track_env_var_sources(self) -> None:
        """Track which configuration values came from environment variables."""
        for env_name in os.environ:
            if not env_name.startswith(ENV_PREFIX):
                continue
            config_key = env_name[len(ENV_PREFIX) :].lower()
            if config_key in UserConfigData.model_fields:
                self._config_sources[config_key] = "environment"

    def get_source(self, key: str) -> str:
        """
        Get the source of a configuration value.

        Returns:
            The source of the configuration value (environment, file:name, default)
        """
        return self._config_sources.get(key, "default")

    def get(self, key: str, default: Any = None) -> Any:
        if hasattr(self._config, key):
            return getattr(self._config, key)
        return default

    def get_log_level_int(self) -> int:
        """Get the configured log level as a ``logging`` module constant."""
        level_map = {
            "DEBUG": logging.DEBUG,
            "INFO": logging.INFO,
            "WARNING": logging.WARNING,
            "ERROR": logging.ERROR,
            "CRITICAL": logging.CRITICAL,
        }
        return level_map.get(self._config.log_level.upper(), logging.WARNING)


def create_user_config(cli_config_path: str | Path | None = None) -> UserConfig:
    """
    Create a UserConfig instance.

    Args:
        cli_config_path: Optional config file path provided via CLI

    Returns:
        Configured UserConfig instance
    """
    return UserConfig(cli_config_path=cli_config_path)
