"""Layer-index references carried inside bindings."""

from collections.abc import Callable, Mapping

from ergobox.bindings.dialects import decode, detect_dialect, get_grammar
from ergobox.bindings.models import Binding, Dialect, LayerAction, LayerMode


IndexRemap = Mapping[int, int | None] | Callable[[int], int | None]


def layer_binding(index: int, mode: LayerMode | str = LayerMode.HOLD) -> Binding:
    """Binding pair that activates layer ``index``."""
    mode = LayerMode(mode)
    return Binding(
        zmk=get_grammar(Dialect.ZMK).encode_layer(index, mode),
        qmk=get_grammar(Dialect.QMK).encode_layer(index, mode),
    )


def parse_layer_reference(binding: str | None) -> LayerAction | None:
    """Return the layer action encoded in a binding string, if any."""
    action = decode(binding)
    return action if isinstance(action, LayerAction) else None


def rewrite_layer_reference(binding: str, remap: IndexRemap) -> str:
    """Rewrite the layer index of a single dialect string.

    ``remap`` is either a mapping of old indices to new ones or a function
    computing the new index. A new index of None clears the binding to no
    action. With a mapping, indices missing from it are left unchanged.
    Strings without a layer reference are returned unchanged, and the
    activation mode is preserved.
    """
    if not binding:
        return binding
    reference = parse_layer_reference(binding)
    if reference is None:
        return binding
    if isinstance(remap, Mapping):
        if reference.index not in remap:
            return binding
        target = remap[reference.index]
    else:
        target = remap(reference.index)
    if target is None:
        return ""
    if target == reference.index:
        return binding
    return get_grammar(detect_dialect(binding)).encode_layer(target, reference.mode)


def remap_binding(binding: Binding, remap: IndexRemap) -> Binding:
    """Rewrite both dialect strings of a binding independently."""
    return Binding(
        zmk=rewrite_layer_reference(binding.zmk, remap),
        qmk=rewrite_layer_reference(binding.qmk, remap),
    )
