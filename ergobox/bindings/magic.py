"""Magic key synthesis.

The ``Magic`` registry item is a placeholder that is only resolved at export
time. On macOS it becomes a plain left GUI key. On other hosts it becomes a
GUI hold-tap into an extra ``Magic`` layer appended after the user layers,
where the chosen alpha keys of the base layer send ``Ctrl+<letter>``.
"""

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from ergobox.bindings.dialects import QMK, ZMK
from ergobox.bindings.models import Dialect
from ergobox.bindings.modifiers import unwrap
from ergobox.bindings.tokens import token_of
from ergobox.bindings.unicode import decode_unicode


if TYPE_CHECKING:
    from ergobox.geometry.models import Key
    from ergobox.layout.models import Layer


logger = logging.getLogger(__name__)

MAGIC_LAYER_NAME = "Magic"
MAGIC_LETTER_OPTIONS: tuple[str, ...] = tuple(chr(code) for code in range(ord("A"), ord("Z") + 1))
DEFAULT_MAGIC_HOLD_LETTERS: tuple[str, ...] = ("A", "X", "C", "V", "B", "P")


def normalize_hold_letters(letters: Iterable[object] | None) -> list[str]:
    """Keep single A-Z letters, deduplicated and in alphabetical order.

    A value that is not a list falls back to the default letters.
    """
    if not isinstance(letters, list | tuple | set | frozenset):
        return list(DEFAULT_MAGIC_HOLD_LETTERS)
    cleaned = {
        letter.strip().upper()
        for letter in letters
        if isinstance(letter, str) and len(letter.strip()) == 1
    }
    return [letter for letter in MAGIC_LETTER_OPTIONS if letter in cleaned]


def is_magic_binding(binding: str | None) -> bool:
    value = (binding or "").strip()
    return value in (ZMK.magic, QMK.magic)


def has_magic(layers: Sequence["Layer"]) -> bool:
    """True when any layer holds the magic placeholder in either dialect."""
    return any(
        is_magic_binding(binding.zmk) or is_magic_binding(binding.qmk)
        for layer in layers
        for binding in layer.bindings.values()
    )


def has_unicode_binding(layers: Sequence["Layer"], dialect: Dialect | str) -> bool:
    """True when any layer holds a unicode binding in the given dialect."""
    dialect = Dialect(dialect)
    return any(
        decode_unicode(binding.for_dialect(dialect))
        for layer in layers
        for binding in layer.bindings.values()
    )


def resolve_magic_binding(
    binding: str, magic_layer_index: int, dialect: Dialect | str, unicode_os: str
) -> str:
    """Replace a magic placeholder with its exported form; other bindings pass through."""
    if not is_magic_binding(binding):
        return binding
    dialect = Dialect(dialect)
    if unicode_os == "macos":
        return "&kp LGUI" if dialect is Dialect.ZMK else "KC_LGUI"
    if dialect is Dialect.ZMK:
        return f"&lt {magic_layer_index} LGUI"
    return f"LT({magic_layer_index}, KC_LGUI)"


def alpha_token(binding: str | None) -> str:
    """Single upper-case letter a binding types (modifiers ignored), or ``""``."""
    base = unwrap(binding).base or binding
    token = token_of(base).upper()
    return token if len(token) == 1 and "A" <= token <= "Z" else ""


def build_magic_layer(
    keys: Sequence["Key"],
    base_layer: "Layer | None",
    dialect: Dialect | str,
    hold_letters: Iterable[str],
) -> list[str]:
    """Bindings of the synthesized magic layer, one per key."""
    dialect = Dialect(dialect)
    letters = set(hold_letters)
    bindings = []
    for key in keys:
        stored = base_layer.bindings.get(key.id) if base_layer else None
        base_value = (stored.zmk or stored.qmk) if stored else ""
        letter = alpha_token(base_value)
        if letter and letter in letters:
            bindings.append(
                f"&kp LC({letter})" if dialect is Dialect.ZMK else f"LCTL(KC_{letter})"
            )
        else:
            bindings.append(ZMK.transparent if dialect is Dialect.ZMK else QMK.transparent)
    logger.debug("Built magic layer with %d bindings for %s", len(bindings), dialect.value)
    return bindings
