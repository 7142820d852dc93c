"""User configuration models."""

from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from ergobox.bindings.magic import DEFAULT_MAGIC_HOLD_LETTERS, normalize_hold_letters
from ergobox.bindings.models import DEFAULT_UNICODE_OS, UNICODE_OS_MODES, LayerMode


class UserConfigData(BaseSettings):
    """User configuration data model with automatic environment variable support.

    Precedence order (highest to lowest):
    1. Environment variables (``ERGOBOX_*``)
    2. Constructor arguments (file data)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="ERGOBOX_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Environment variables override values read from config files."""
        return (env_settings, init_settings, file_secret_settings)

    # Logging
    log_level: str = "WARNING"

    # Key palette
    key_registry_path: Path | None = Field(
        default=None,
        description="YAML key registry replacing the bundled one",
    )

    # Defaults for new projects
    unicode_os: str = Field(
        default=DEFAULT_UNICODE_OS,
        description="Host unicode input mode: macos, linux, wincompose or winnumpad",
    )
    magic_hold_letters: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_MAGIC_HOLD_LETTERS),
        description="Letters sending Ctrl+<letter> on the synthesized Magic layer",
    )
    layer_mode: LayerMode = Field(
        default=LayerMode.HOLD,
        description="Activation mode used when binding layer keys",
    )

    # Export metadata
    keyboard_name: str = Field(
        default="custom-ergogen",
        description="Artifact file stem and QMK keyboard_name",
    )
    manufacturer: str = "custom"
    maintainer: str = "you"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a recognized value."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        upper_v = v.strip().upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return upper_v

    @field_validator("unicode_os")
    @classmethod
    def validate_unicode_os(cls, v: str) -> str:
        valid_modes = [mode.id for mode in UNICODE_OS_MODES]
        lower_v = v.strip().lower()
        if lower_v not in valid_modes:
            raise ValueError(f"Unicode OS must be one of {valid_modes}")
        return lower_v

    @field_validator("magic_hold_letters", mode="before")
    @classmethod
    def decode_magic_hold_letters(cls, v: Any) -> list[str]:
        # Environment values arrive as "A,X,C"
        if isinstance(v, str):
            v = [letter for letter in v.split(",") if letter.strip()]
        return normalize_hold_letters(v)

    @field_validator("key_registry_path", mode="before")
    @classmethod
    def expand_key_registry_path(cls, v: Any) -> Path | None:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return Path(v).expanduser()

    @field_validator("keyboard_name")
    @classmethod
    def validate_keyboard_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Keyboard name cannot be empty")
        return v.strip()
