"""Unicode code point bindings."""

import re
from dataclasses import dataclass

from ergobox.bindings.dialects import QMK, ZMK, decode
from ergobox.bindings.models import Binding, UnicodeChar


UNICODE_MAX = 0x10FFFF

HEX_DIGITS_ERROR = "Use hex digits 0-9 and A-F."
RANGE_ERROR = "Code points must be between U+0 and U+10FFFF."
EMPTY_ERROR = "Enter a Unicode code point."

_HEX = re.compile(r"^[0-9A-F]+$")


@dataclass(frozen=True)
class UnicodeInput:
    """Normalized user input; ``error`` is empty when ``hex`` is usable."""

    hex: str
    error: str = ""

    @property
    def is_valid(self) -> bool:
        return bool(self.hex) and not self.error


def normalize_unicode_input(value: str | None) -> UnicodeInput:
    """Validate a code point typed as ``1F600``, ``U+1F600`` or ``0x1F600``.

    Empty input is not an error by itself; ``unicode_binding`` reports it.
    """
    text = (value or "").strip().upper()
    stripped = re.sub(r"^0X", "", re.sub(r"^U\+", "", text))
    if not stripped:
        return UnicodeInput(hex="")
    if not _HEX.match(stripped):
        return UnicodeInput(hex=stripped, error=HEX_DIGITS_ERROR)
    if int(stripped, 16) > UNICODE_MAX:
        return UnicodeInput(hex=stripped, error=RANGE_ERROR)
    return UnicodeInput(hex=stripped)


def encode_unicode(hex_digits: str) -> Binding:
    """Build the binding pair for an already normalized hex code point."""
    return Binding(zmk=ZMK.encode_unicode(hex_digits), qmk=QMK.encode_unicode(hex_digits))


def decode_unicode(binding: str | None) -> str:
    """Return the upper-case hex code point of a unicode binding, or ``""``."""
    action = decode(binding)
    return action.hex if isinstance(action, UnicodeChar) else ""


def binding_unicode_hex(binding: Binding) -> str:
    """Code point of a binding pair, preferring the ZMK string."""
    return decode_unicode(binding.zmk) or decode_unicode(binding.qmk)


def unicode_binding(value: str | None) -> tuple[Binding | None, str]:
    """Validate input and build its binding without side effects.

    Returns:
        ``(binding, "")`` on success or ``(None, message)`` when the input is rejected
    """
    normalized = normalize_unicode_input(value)
    if not normalized.is_valid:
        return None, normalized.error or EMPTY_ERROR
    return encode_unicode(normalized.hex), ""
