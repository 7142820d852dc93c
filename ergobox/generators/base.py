"""Shared pieces of the firmware source renderers."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ergobox.bindings.dialects import get_grammar
from ergobox.bindings.magic import (
    DEFAULT_MAGIC_HOLD_LETTERS,
    MAGIC_LAYER_NAME,
    build_magic_layer,
    has_magic,
    resolve_magic_binding,
)
from ergobox.bindings.models import DEFAULT_UNICODE_OS, Dialect
from ergobox.geometry.models import Key, MatrixDescriptor
from ergobox.layout.models import Layer, clamp_layer_index


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeymapExport:
    """Everything a renderer needs for one dialect.

    ``keys`` are the keys to emit, in emission order. ``default_layer`` and
    ``unicode_os`` are the settings of the dialect being rendered.
    """

    keys: Sequence[Key]
    layers: Sequence[Layer]
    matrix: MatrixDescriptor
    default_layer: int = 0
    unicode_os: str = DEFAULT_UNICODE_OS
    hold_letters: Sequence[str] = field(default_factory=lambda: DEFAULT_MAGIC_HOLD_LETTERS)

    @property
    def safe_default_layer(self) -> int:
        return clamp_layer_index(self.default_layer, self.layers)


@dataclass(frozen=True)
class RenderedLayer:
    name: str
    bindings: list[str]


def render_layers(export: KeymapExport, dialect: Dialect) -> list[RenderedLayer]:
    """Binding strings per layer and key, with magic placeholders resolved.

    Missing or empty assignments become the dialect's no-action binding. When
    magic keys are in use on a non-macOS host a ``Magic`` layer is appended.
    """
    grammar = get_grammar(dialect)
    magic_in_use = has_magic(export.layers)
    magic_index = len(export.layers)

    rendered = []
    for layer in export.layers:
        bindings = []
        for key in export.keys:
            stored = layer.binding_for(key.id)
            value = (stored.for_dialect(dialect) if stored else "") or grammar.none
            if magic_in_use:
                value = resolve_magic_binding(
                    value, magic_index, dialect, export.unicode_os
                )
            bindings.append(value or grammar.none)
        rendered.append(RenderedLayer(name=layer.name, bindings=bindings))

    if magic_in_use and export.unicode_os != "macos":
        base_layer = export.layers[0] if export.layers else None
        rendered.append(
            RenderedLayer(
                name=MAGIC_LAYER_NAME,
                bindings=build_magic_layer(
                    export.keys, base_layer, dialect, export.hold_letters
                ),
            )
        )
        logger.debug("Appended magic layer at index %d", magic_index)

    return rendered
