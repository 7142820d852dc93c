"""Project save document models (``*.kb.json``)."""

from typing import Any

from pydantic import Field, field_validator

from ergobox.bindings.magic import DEFAULT_MAGIC_HOLD_LETTERS, normalize_hold_letters
from ergobox.bindings.models import DEFAULT_UNICODE_OS, Dialect, get_unicode_os
from ergobox.geometry.models import ResolvedLayout
from ergobox.layout.models import Layer, clamp_layer_index, create_layer
from ergobox.models.base import ErgoboxBaseModel


PROJECT_VERSION = 1


class DefaultLayers(ErgoboxBaseModel):
    """Layer active at power-on, per dialect."""

    zmk: int = 0
    qmk: int = 0


class UnicodeOsSettings(ErgoboxBaseModel):
    zmk: str = DEFAULT_UNICODE_OS
    qmk: str = DEFAULT_UNICODE_OS

    @field_validator("zmk", "qmk", mode="before")
    @classmethod
    def known_os(cls, v: Any) -> str:
        return get_unicode_os(v if isinstance(v, str) else None).id


class UnicodeSettings(ErgoboxBaseModel):
    os: UnicodeOsSettings = Field(default_factory=UnicodeOsSettings)


class MagicSettings(ErgoboxBaseModel):
    hold_letters: list[str] = Field(
        default_factory=lambda: list(DEFAULT_MAGIC_HOLD_LETTERS), alias="holdLetters"
    )

    @field_validator("hold_letters", mode="before")
    @classmethod
    def normalize_letters(cls, v: Any) -> list[str]:
        return normalize_hold_letters(v)


class KeymapProject(ErgoboxBaseModel):
    """Editable keymap state together with the geometry it was built on.

    ``layout_yaml`` is the source layout document; ``parsed`` is its last
    resolution, kept so a project can be exported without re-parsing.
    """

    version: int = PROJECT_VERSION
    layout_yaml: str = Field(default="", alias="yaml")
    parsed: ResolvedLayout | None = None
    layers: list[Layer] = Field(default_factory=lambda: [create_layer(0)])
    active_layer: int = Field(default=0, alias="activeLayer")
    selected_key_id: str | None = Field(default=None, alias="selectedKeyId")
    default_layers: DefaultLayers = Field(
        default_factory=DefaultLayers, alias="defaultLayers"
    )
    unicode: UnicodeSettings = Field(default_factory=UnicodeSettings)
    magic: MagicSettings = Field(default_factory=MagicSettings)

    @property
    def layer_names(self) -> list[str]:
        return [layer.name for layer in self.layers]

    def default_layer(self, dialect: Dialect | str) -> int:
        value = getattr(self.default_layers, Dialect(dialect).value)
        return clamp_layer_index(value, self.layers)

    def unicode_os(self, dialect: Dialect | str) -> str:
        return str(getattr(self.unicode.os, Dialect(dialect).value))

    def get_layer(self, index: int) -> Layer | None:
        return self.layers[index] if 0 <= index < len(self.layers) else None
