"""Layout layer service for structural layer edits.

Every edit returns a new layer list together with the mapping of old layer
indices to new ones and rewrites the layer references stored in bindings,
so ``&mo 2`` keeps pointing at the same layer after layers move around.
Inputs are never mutated.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TypeVar

from ergobox.bindings.layers import IndexRemap, remap_binding
from ergobox.layout.models import Layer, create_layer, layer_id_for


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class LayerEdit:
    """Result of a layer edit.

    ``index_map`` maps every old layer index to its new index, or to None for
    a removed layer. ``changed`` is False when the edit was a no-op.
    """

    layers: list[Layer]
    index_map: dict[int, int | None] = field(default_factory=dict)
    changed: bool = True


def move_item(items: Sequence[T], from_index: int, to_index: int) -> list[T]:
    """Remove the item at ``from_index`` and insert it at ``to_index``."""
    moved = list(items)
    item = moved.pop(from_index)
    moved.insert(to_index, item)
    return moved


def remap_layers(layers: Sequence[Layer], remap: IndexRemap) -> list[Layer]:
    """Rewrite the layer references of every binding in every layer."""
    return [
        layer.with_bindings(
            {key_id: remap_binding(binding, remap) for key_id, binding in layer.bindings.items()}
        )
        for layer in layers
    ]


def _identity(layers: Sequence[Layer]) -> dict[int, int | None]:
    return {index: index for index in range(len(layers))}


def _unchanged(layers: Sequence[Layer], reason: str, *args: object) -> LayerEdit:
    logger.debug("Layer edit ignored: " + reason, *args)
    return LayerEdit(layers=list(layers), index_map=_identity(layers), changed=False)


def _removal_target(removed: int) -> Callable[[int], int | None]:
    def target(index: int) -> int | None:
        if index == removed:
            return None
        return index - 1 if index > removed else index

    return target


class LayoutLayerService:
    """Service for structural edits to an ordered layer list."""

    def add_layer(self, layers: Sequence[Layer]) -> LayerEdit:
        """Append an empty layer named ``Layer <n>``."""
        taken = {layer.id for layer in layers}
        new_layer = create_layer(len(layers), taken)
        logger.debug("Adding layer %s at index %d", new_layer.id, len(layers))
        return LayerEdit(layers=[*layers, new_layer], index_map=_identity(layers))

    def duplicate_layer(self, layers: Sequence[Layer], index: int) -> LayerEdit:
        """Append a copy of the bindings of layer ``index`` named ``<name> Copy``."""
        if not 0 <= index < len(layers):
            return _unchanged(layers, "duplicate index %d out of range", index)
        source = layers[index]
        taken = {layer.id for layer in layers}
        copy = Layer(
            id=layer_id_for(len(layers), taken),
            name=f"{source.name} Copy",
            bindings=dict(source.bindings),
        )
        logger.debug("Duplicating layer %d as %s", index, copy.id)
        return LayerEdit(layers=[*layers, copy], index_map=_identity(layers))

    def rename_layer(self, layers: Sequence[Layer], index: int, name: str) -> LayerEdit:
        if not 0 <= index < len(layers):
            return _unchanged(layers, "rename index %d out of range", index)
        renamed = [
            layer.model_copy(update={"name": name}) if position == index else layer
            for position, layer in enumerate(layers)
        ]
        return LayerEdit(layers=renamed, index_map=_identity(layers))

    def remove_layer(self, layers: Sequence[Layer], index: int) -> LayerEdit:
        """Remove layer ``index``.

        References to the removed layer are cleared to no action, references
        to later layers shift down by one. The base layer and the last
        remaining layer cannot be removed.
        """
        if len(layers) <= 1:
            return _unchanged(layers, "cannot remove the only layer")
        if index == 0:
            return _unchanged(layers, "cannot remove the base layer")
        if not 0 < index < len(layers):
            return _unchanged(layers, "remove index %d out of range", index)

        target = _removal_target(index)
        remaining = [layer for position, layer in enumerate(layers) if position != index]
        logger.debug("Removing layer %d (%s)", index, layers[index].id)
        return LayerEdit(
            layers=remap_layers(remaining, target),
            index_map={old: target(old) for old in range(len(layers))},
        )

    def reorder_layers(
        self, layers: Sequence[Layer], from_index: int, to_index: int
    ) -> LayerEdit:
        """Move layer ``from_index`` to ``to_index``; the base layer stays first."""
        if from_index == 0 or to_index == 0:
            return _unchanged(layers, "the base layer cannot be moved")
        if from_index == to_index:
            return _unchanged(layers, "layer %d moved onto itself", from_index)
        if not (0 < from_index < len(layers) and 0 < to_index < len(layers)):
            return _unchanged(
                layers, "move %d -> %d out of range", from_index, to_index
            )

        new_order = move_item(range(len(layers)), from_index, to_index)
        index_map: dict[int, int | None] = {
            old: new for new, old in enumerate(new_order)
        }
        logger.debug("Moving layer %d to %d", from_index, to_index)
        return LayerEdit(
            layers=remap_layers(move_item(layers, from_index, to_index), index_map),
            index_map=index_map,
        )


def create_layout_layer_service() -> LayoutLayerService:
    """Create a LayoutLayerService instance."""
    return LayoutLayerService()
