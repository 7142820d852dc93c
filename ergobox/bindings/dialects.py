"""ZMK and QMK binding grammars.

Each grammar decodes a binding string into a ``KeyAction`` and encodes a
``KeyAction`` back into its own syntax:

    ZMK:  &kp A   &kp LS(LC(A))   &mo 2   &uc 0x1F600 0   &trans   &none
    QMK:  KC_A    LSFT(LCTL(KC_A)) MO(2)   UC(0x1F600)     KC_TRNS  KC_NO
"""

import re
from abc import ABC, abstractmethod
from typing import ClassVar

from ergobox.bindings.models import (
    MODIFIERS_BY_ID,
    MODIFIERS_BY_WRAPPER,
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
)


_WRAPPER = re.compile(r"^([A-Z]+)\((.+)\)$")


def peel_modifiers(text: str) -> tuple[tuple[str, ...], str]:
    """Strip modifier wrapper calls from a keycode expression.

    Wrapper names of either dialect are accepted.

    Returns:
        Modifier ids in application order (innermost first) and the inner text
    """
    peeled: list[str] = []
    inner = text.strip()
    while match := _WRAPPER.match(inner):
        modifier = MODIFIERS_BY_WRAPPER.get(match.group(1))
        if modifier is None:
            break
        peeled.append(modifier.id)
        inner = match.group(2).strip()
    return tuple(reversed(peeled)), inner


def nest_modifiers(token: str, modifiers: tuple[str, ...], dialect: Dialect) -> str:
    """Wrap ``token`` with one wrapper call per modifier, first id innermost."""
    wrapped = token
    for modifier_id in modifiers:
        wrapped = f"{MODIFIERS_BY_ID[modifier_id].wrapper(dialect)}({wrapped})"
    return wrapped


class DialectGrammar(ABC):
    """Decoder/encoder pair for one firmware dialect."""

    dialect: ClassVar[Dialect]
    none: ClassVar[str]
    transparent: ClassVar[str]
    magic: ClassVar[str]
    layer_calls: ClassVar[dict[LayerMode, str]]

    @abstractmethod
    def decode(self, text: str | None) -> KeyAction:
        """Parse a binding string of this dialect."""

    @abstractmethod
    def encode_key(self, token: str, modifiers: tuple[str, ...] = ()) -> str:
        """Render a (possibly modified) key press."""

    @abstractmethod
    def encode_layer(self, index: int, mode: LayerMode) -> str:
        """Render a layer action."""

    @abstractmethod
    def encode_unicode(self, hex_digits: str) -> str:
        """Render a unicode code point."""

    def encode(self, action: KeyAction) -> str:
        """Render any key action in this dialect."""
        match action:
            case NoAction():
                return self.none
            case Transparent():
                return self.transparent
            case Magic():
                return self.magic
            case PlainKey(token=token):
                return self.encode_key(token)
            case Modified(modifiers=modifiers, base=base):
                return self.encode_key(base.token, modifiers)
            case LayerAction(index=index, mode=mode):
                return self.encode_layer(index, mode)
            case UnicodeChar(hex=hex_digits):
                return self.encode_unicode(hex_digits)
            case Raw(text=text):
                return text
        raise TypeError(f"Unsupported key action: {action!r}")

    def _mode_for(self, call: str) -> LayerMode:
        return next(mode for mode, name in self.layer_calls.items() if name == call)

    @staticmethod
    def _key_action(modifiers: tuple[str, ...], token: str) -> KeyAction:
        base = PlainKey(token)
        return Modified(modifiers, base) if modifiers else base


class ZmkDialect(DialectGrammar):
    dialect = Dialect.ZMK
    none = "&none"
    transparent = "&trans"
    magic = "&magic"
    layer_calls = {LayerMode.HOLD: "mo", LayerMode.TOGGLE: "tog", LayerMode.ONCE: "sl"}

    _LAYER = re.compile(r"^&(mo|tog|sl)\s+(\d+)$")
    _UNICODE = re.compile(r"^&uc\s+(?:0x)?([0-9a-fA-F]+)\b")
    _KEY_PRESS = re.compile(r"^&kp\s+(.+)$")

    def decode(self, text: str | None) -> KeyAction:
        value = (text or "").strip()
        if not value or value == self.none:
            return NoAction()
        if value == self.transparent:
            return Transparent()
        if value == self.magic:
            return Magic()
        if match := self._UNICODE.match(value):
            return UnicodeChar(match.group(1).upper())
        if match := self._LAYER.match(value):
            return LayerAction(int(match.group(2)), self._mode_for(match.group(1)))
        if match := self._KEY_PRESS.match(value):
            modifiers, inner = peel_modifiers(match.group(1))
            return self._key_action(modifiers, inner)
        return Raw(value)

    def encode_key(self, token: str, modifiers: tuple[str, ...] = ()) -> str:
        return f"&kp {nest_modifiers(token, modifiers, self.dialect)}"

    def encode_layer(self, index: int, mode: LayerMode) -> str:
        return f"&{self.layer_calls[LayerMode(mode)]} {index}"

    def encode_unicode(self, hex_digits: str) -> str:
        return f"&uc 0x{hex_digits} 0"


class QmkDialect(DialectGrammar):
    dialect = Dialect.QMK
    none = "KC_NO"
    transparent = "KC_TRNS"
    magic = "MAGIC"
    layer_calls = {LayerMode.HOLD: "MO", LayerMode.TOGGLE: "TG", LayerMode.ONCE: "OSL"}

    _LAYER = re.compile(r"^(MO|TG|OSL)\((\d+)\)$")
    _UNICODE = re.compile(r"^UC\(\s*0x([0-9a-fA-F]+)\s*\)$")
    _KEYCODE = re.compile(r"^KC_([A-Za-z0-9_]+)$")

    def decode(self, text: str | None) -> KeyAction:
        value = (text or "").strip()
        if not value or value == self.none:
            return NoAction()
        if value == self.transparent:
            return Transparent()
        if value == self.magic:
            return Magic()
        if match := self._UNICODE.match(value):
            return UnicodeChar(match.group(1).upper())
        if match := self._LAYER.match(value):
            return LayerAction(int(match.group(2)), self._mode_for(match.group(1)))
        modifiers, inner = peel_modifiers(value)
        if not modifiers:
            if match := self._KEYCODE.match(value):
                return PlainKey(match.group(1))
            return Raw(value)
        if match := self._KEYCODE.match(inner):
            return self._key_action(modifiers, match.group(1))
        return Raw(value)

    def encode_key(self, token: str, modifiers: tuple[str, ...] = ()) -> str:
        return nest_modifiers(f"KC_{token}", modifiers, self.dialect)

    def encode_layer(self, index: int, mode: LayerMode) -> str:
        return f"{self.layer_calls[LayerMode(mode)]}({index})"

    def encode_unicode(self, hex_digits: str) -> str:
        return f"UC(0x{hex_digits})"


ZMK = ZmkDialect()
QMK = QmkDialect()
_GRAMMARS: dict[Dialect, DialectGrammar] = {Dialect.ZMK: ZMK, Dialect.QMK: QMK}


def get_grammar(dialect: Dialect | str) -> DialectGrammar:
    return _GRAMMARS[Dialect(dialect)]


def detect_dialect(text: str | None) -> Dialect:
    """Guess the dialect of a binding string; ZMK bindings start with ``&``."""
    return Dialect.ZMK if (text or "").strip().startswith("&") else Dialect.QMK


def decode(text: str | None, dialect: Dialect | str | None = None) -> KeyAction:
    """Decode a binding string, detecting its dialect when not given."""
    grammar = get_grammar(dialect if dialect is not None else detect_dialect(text))
    return grammar.decode(text)
