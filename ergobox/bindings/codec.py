"""Label resolution and registry-aware helpers for binding pairs."""

import re
from collections.abc import Iterable, Sequence

from ergobox.bindings.layers import layer_binding
from ergobox.bindings.models import Binding, Dialect, LayerMode
from ergobox.bindings.modifiers import modifier_labels, unwrap, wrap_binding
from ergobox.bindings.registry import KeyRegistry, KeyRegistryItem
from ergobox.bindings.tokens import normalize_token, token_of
from ergobox.bindings.unicode import binding_unicode_hex


KEY_LABELS: dict[str, str] = {
    "ESC": "Esc",
    "ESCAPE": "Esc",
    "TAB": "Tab",
    "ENTER": "Ent",
    "RETURN": "Ent",
    "SPACE": "Spc",
    "BACKSPACE": "Bksp",
    "BSPC": "Bksp",
    "DELETE": "Del",
    "DEL": "Del",
    "SHIFT": "Shift",
    "LSHIFT": "Shift",
    "RSHIFT": "Shift",
    "LSFT": "Shift",
    "RSFT": "Shift",
    "CONTROL": "Ctrl",
    "CTRL": "Ctrl",
    "LCTRL": "Ctrl",
    "RCTRL": "Ctrl",
    "LCTL": "Ctrl",
    "RCTL": "Ctrl",
    "ALT": "Alt",
    "LALT": "Alt",
    "RALT": "Alt",
    "GUI": "Gui",
    "LGUI": "Gui",
    "RGUI": "Gui",
    "CMD": "Cmd",
    "LCMD": "Cmd",
    "RCMD": "Cmd",
    "CAPS": "Caps",
    "CAPSLOCK": "Caps",
    "HOME": "Home",
    "END": "End",
    "PGUP": "PgUp",
    "PAGEUP": "PgUp",
    "PGDN": "PgDn",
    "PAGEDOWN": "PgDn",
    "INS": "Ins",
    "INSERT": "Ins",
}

ARROW_LABELS: dict[str, str] = {
    "UP": "↑",
    "DOWN": "↓",
    "LEFT": "←",
    "RIGHT": "→",
    "RGHT": "→",
}

_LAYER_MARKER = re.compile(r"^L(\d+)$")
_ZMK_DIGIT = re.compile(r"^N\d$")


def format_key_label(binding: str | None) -> str:
    """Fallback label from the bare token using the built-in symbol tables."""
    token = token_of(binding)
    if not token or _LAYER_MARKER.match(token):
        return token

    upper = token.upper()
    if len(upper) == 1:
        return upper
    if _ZMK_DIGIT.match(upper):
        return upper[1:]

    normalized = normalize_token(upper)
    return ARROW_LABELS.get(normalized) or KEY_LABELS.get(normalized) or token


class BindingCodec:
    """Resolves user-facing labels for bindings against a key registry.

    The codec holds only the read-only registry and is safe to share.
    """

    def __init__(self, registry: KeyRegistry) -> None:
        self.registry = registry

    def canonical_label(self, binding: str | None) -> str:
        """Registry label of a binding, or ``""`` when the registry has none."""
        return self.registry.label_for_token(token_of(binding))

    def label_for(self, binding: str | None, layer_names: Sequence[str] = ()) -> str:
        """Label of one dialect string; layer markers resolve to layer names."""
        if not binding:
            return ""
        label = self.canonical_label(binding) or format_key_label(binding)
        if match := _LAYER_MARKER.match(label):
            index = int(match.group(1))
            if index < len(layer_names) and layer_names[index]:
                return layer_names[index]
        return label

    def key_label(self, binding: Binding | None, layer_names: Sequence[str] = ()) -> str:
        """Label of a binding pair as shown on a key.

        Unicode code points win, then modifier combinations
        (``Ctrl+Shift+A``), then the plain label of the ZMK string and finally
        of the QMK string.
        """
        if binding is None:
            return ""
        if unicode_hex := binding_unicode_hex(binding):
            return f"U+{unicode_hex}"

        zmk_split = unwrap(binding.zmk, Dialect.ZMK)
        qmk_split = unwrap(binding.qmk, Dialect.QMK)
        split = zmk_split if zmk_split.modifiers else qmk_split
        if split.modifiers:
            base_label = (
                self.label_for(split.base, layer_names)
                or self.label_for(binding.zmk, layer_names)
                or self.label_for(binding.qmk, layer_names)
            )
            if base_label:
                return "+".join([*modifier_labels(split.modifiers), base_label])

        return self.label_for(binding.zmk, layer_names) or self.label_for(
            binding.qmk, layer_names
        )

    def item_binding(
        self, item: KeyRegistryItem, modifier_ids: Iterable[str] | None = None
    ) -> Binding:
        """Binding pair for a registry item, optionally wrapped in modifiers."""
        return wrap_binding(Binding(zmk=item.zmk, qmk=item.qmk), modifier_ids)

    def layer_palette(
        self, layer_names: Sequence[str], mode: LayerMode | str = LayerMode.HOLD
    ) -> list[KeyRegistryItem]:
        """Assignable layer actions for every overlay layer (index 1 and up)."""
        palette = []
        for index, name in enumerate(layer_names[1:], start=1):
            binding = layer_binding(index, mode)
            palette.append(KeyRegistryItem(label=name, zmk=binding.zmk, qmk=binding.qmk))
        return palette


def create_binding_codec(registry: KeyRegistry | None = None) -> BindingCodec:
    """Create a BindingCodec over ``registry`` or the bundled default registry."""
    if registry is None:
        from ergobox.config.key_registry import load_key_registry

        registry = load_key_registry()
    return BindingCodec(registry)
