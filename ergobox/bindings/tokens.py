"""Binding tokenizer: reduce a binding string to a bare, dialect-free token."""

import re

from ergobox.bindings.dialects import decode
from ergobox.bindings.models import (
    LayerAction,
    Magic,
    Modified,
    NoAction,
    PlainKey,
    Raw,
    Transparent,
    UnicodeChar,
)


_KEYCODE_IN_TEXT = re.compile(r"KC_([A-Z0-9_]+)")


def normalize_token(token: str) -> str:
    """Case and underscore insensitive form of a token."""
    return token.upper().replace("_", "")


def token_of(binding: str | None) -> str:
    """Bare token of a binding string.

    ``&kp ESC`` and ``KC_ESC`` give ``ESC``; layer actions of any mode give
    ``L<index>``; no-action bindings give ``""``. Modifier wrappers are
    transparent: ``&kp LS(A)`` gives ``A``.
    """
    action = decode(binding)
    match action:
        case NoAction():
            return ""
        case Transparent():
            return "TRNS"
        case Magic():
            return "MAGIC"
        case PlainKey(token=token):
            return token
        case Modified(base=base):
            return base.token
        case LayerAction(index=index):
            return f"L{index}"
        case UnicodeChar(hex=hex_digits):
            return f"U+{hex_digits}"
        case Raw(text=text):
            if match := _KEYCODE_IN_TEXT.search(text):
                return match.group(1)
            return text
    return ""
