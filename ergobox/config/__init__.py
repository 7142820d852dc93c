"""Configuration: user settings and key registry loading."""

from ergobox.config.key_registry import load_key_registry, parse_key_registry
from ergobox.config.models import UserConfigData
from ergobox.config.user_config import UserConfig, create_user_config


__all__ = [
    "UserConfig",
    "UserConfigData",
    "create_user_config",
    "load_key_registry",
    "parse_key_registry",
]
