"""Layout domain: layers and the edits applied to them."""

from ergobox.layout.layer import (
    LayerEdit,
    LayoutLayerService,
    create_layout_layer_service,
    move_item,
    remap_layers,
)
from ergobox.layout.models import (
    BASE_LAYER_NAME,
    Layer,
    clamp_layer_index,
    create_layer,
    find_layer_index_by_id,
    layer_names,
)


__all__ = [
    "BASE_LAYER_NAME",
    "Layer",
    "LayerEdit",
    "LayoutLayerService",
    "clamp_layer_index",
    "create_layer",
    "create_layout_layer_service",
    "find_layer_index_by_id",
    "layer_names",
    "move_item",
    "remap_layers",
]
