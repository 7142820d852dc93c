"""Layer list edits with layer reference rewriting."""

from ergobox.layout.layer.service import (
    LayerEdit,
    LayoutLayerService,
    create_layout_layer_service,
    move_item,
    remap_layers,
)


__all__ = [
    "LayerEdit",
    "LayoutLayerService",
    "create_layout_layer_service",
    "move_item",
    "remap_layers",
]
