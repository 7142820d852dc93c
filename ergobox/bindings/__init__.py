"""Dual-dialect binding codec.

This package contains everything that reasons about ZMK and QMK binding
strings:
- Binding pair model and the dialect-neutral key action representation
- ZMK and QMK grammars (decode/encode)
- Modifier wrap/unwrap, layer references and unicode code points
- Key registry and label resolution
- Magic key synthesis used at export time
"""

from ergobox.bindings.codec import (
    ARROW_LABELS,
    KEY_LABELS,
    BindingCodec,
    create_binding_codec,
    format_key_label,
)
from ergobox.bindings.dialects import (
    QMK,
    ZMK,
    DialectGrammar,
    QmkDialect,
    ZmkDialect,
    decode,
    detect_dialect,
    get_grammar,
)
from ergobox.bindings.layers import (
    layer_binding,
    parse_layer_reference,
    remap_binding,
    rewrite_layer_reference,
)
from ergobox.bindings.magic import (
    DEFAULT_MAGIC_HOLD_LETTERS,
    MAGIC_LAYER_NAME,
    build_magic_layer,
    has_magic,
    has_unicode_binding,
    is_magic_binding,
    normalize_hold_letters,
    resolve_magic_binding,
)
from ergobox.bindings.models import (
    DEFAULT_UNICODE_OS,
    MODIFIER_ORDER,
    MODIFIERS,
    UNICODE_OS_MODES,
    Binding,
    Dialect,
    KeyAction,
    LayerAction,
    LayerMode,
    Magic,
    Modified,
    NoAction,
    PlainKey,
    Raw,
    Transparent,
    UnicodeChar,
    get_unicode_os,
)
from ergobox.bindings.modifiers import (
    ModifierSplit,
    canonical_modifiers,
    modifier_labels,
    unwrap,
    wrap,
    wrap_binding,
)
from ergobox.bindings.registry import (
    KeyGroup,
    KeyRegistry,
    KeyRegistryItem,
    KeySection,
)
from ergobox.bindings.tokens import normalize_token, token_of
from ergobox.bindings.unicode import (
    UnicodeInput,
    binding_unicode_hex,
    decode_unicode,
    encode_unicode,
    normalize_unicode_input,
    unicode_binding,
)


__all__ = [
    # Models
    "Binding",
    "Dialect",
    "LayerMode",
    "KeyAction",
    "NoAction",
    "Transparent",
    "Magic",
    "PlainKey",
    "Modified",
    "LayerAction",
    "UnicodeChar",
    "Raw",
    "MODIFIERS",
    "MODIFIER_ORDER",
    "UNICODE_OS_MODES",
    "DEFAULT_UNICODE_OS",
    "get_unicode_os",
    # Grammars
    "DialectGrammar",
    "ZmkDialect",
    "QmkDialect",
    "ZMK",
    "QMK",
    "decode",
    "detect_dialect",
    "get_grammar",
    # Codec
    "BindingCodec",
    "create_binding_codec",
    "format_key_label",
    "KEY_LABELS",
    "ARROW_LABELS",
    "normalize_token",
    "token_of",
    "ModifierSplit",
    "canonical_modifiers",
    "modifier_labels",
    "unwrap",
    "wrap",
    "wrap_binding",
    "layer_binding",
    "parse_layer_reference",
    "rewrite_layer_reference",
    "remap_binding",
    "UnicodeInput",
    "normalize_unicode_input",
    "encode_unicode",
    "decode_unicode",
    "binding_unicode_hex",
    "unicode_binding",
    # Registry
    "KeyRegistry",
    "KeyRegistryItem",
    "KeySection",
    "KeyGroup",
    # Magic
    "MAGIC_LAYER_NAME",
    "DEFAULT_MAGIC_HOLD_LETTERS",
    "normalize_hold_letters",
    "is_magic_binding",
    "has_magic",
    "has_unicode_binding",
    "resolve_magic_binding",
    "build_magic_layer",
]
