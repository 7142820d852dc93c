"""Layer models."""

from collections.abc import Container, Sequence

from pydantic import Field

from ergobox.bindings.models import Binding
from ergobox.models.base import ErgoboxBaseModel


BASE_LAYER_NAME = "Base"


class Layer(ErgoboxBaseModel):
    """A named set of key bindings keyed by key id.

    Index 0 in a layer list is the base layer. Keys without an entry have no
    assignment and export as no action.
    """

    id: str
    name: str
    bindings: dict[str, Binding] = Field(default_factory=dict)

    def binding_for(self, key_id: str) -> Binding | None:
        return self.bindings.get(key_id)

    def with_binding(self, key_id: str, binding: Binding) -> "Layer":
        """Return a copy with one key assignment replaced."""
        return self.model_copy(update={"bindings": {**self.bindings, key_id: binding}})

    def with_bindings(self, bindings: dict[str, Binding]) -> "Layer":
        return self.model_copy(update={"bindings": dict(bindings)})


def layer_id_for(index: int, taken_ids: Container[str] = ()) -> str:
    """First free ``layer-<n>`` id starting at ``index``."""
    candidate = index
    while f"layer-{candidate}" in taken_ids:
        candidate += 1
    return f"layer-{candidate}"


def create_layer(index: int, taken_ids: Container[str] = ()) -> Layer:
    """New empty layer named ``Base`` for index 0 and ``Layer <n>`` otherwise."""
    return Layer(
        id=layer_id_for(index, taken_ids),
        name=BASE_LAYER_NAME if index == 0 else f"Layer {index}",
    )


def clamp_layer_index(index: object, layers: Sequence[Layer]) -> int:
    """Clamp an index into the layer list; non-integers become 0."""
    if isinstance(index, bool) or not isinstance(index, int | float):
        return 0
    if index != index or index in (float("inf"), float("-inf")):
        return 0
    max_index = max(len(layers) - 1, 0)
    return min(max(0, int(index)), max_index)


def find_layer_index_by_id(
    layers: Sequence[Layer], layer_id: str | None, fallback: int = 0
) -> int:
    if not layer_id:
        return fallback
    return next(
        (index for index, layer in enumerate(layers) if layer.id == layer_id), fallback
    )


def layer_names(layers: Sequence[Layer]) -> list[str]:
    return [layer.name for layer in layers]
