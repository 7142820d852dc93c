"""Binding models and the dialect-neutral key action representation.

A stored binding is a pair of firmware strings, one per dialect. Each dialect
grammar decodes its string into a ``KeyAction`` and encodes it back, so code
that reasons about bindings (labels, modifiers, layer references) works on
``KeyAction`` values instead of per-dialect string patterns.

Plain key tokens stay in their dialect's vocabulary (``N1`` for ZMK, ``1`` for
QMK); translating between vocabularies is the key registry's job.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from ergobox.models.base import ErgoboxBaseModel


class Dialect(str, Enum):
    """Supported firmware binding dialects."""

    ZMK = "zmk"
    QMK = "qmk"


class LayerMode(str, Enum):
    """How a layer action activates its target layer."""

    HOLD = "hold"
    TOGGLE = "toggle"
    ONCE = "once"


class Binding(ErgoboxBaseModel):
    """A key assignment expressed in both firmware dialects."""

    zmk: str = ""
    qmk: str = ""

    def for_dialect(self, dialect: Dialect | str) -> str:
        return self.zmk if Dialect(dialect) is Dialect.ZMK else self.qmk

    def replace(self, dialect: Dialect | str, value: str) -> "Binding":
        """Return a copy with one dialect string replaced."""
        field = Dialect(dialect).value
        return self.model_copy(update={field: value})


@dataclass(frozen=True)
class NoAction:
    """Key does nothing (``&none`` / ``KC_NO`` / empty)."""


@dataclass(frozen=True)
class Transparent:
    """Key falls through to the next active layer below."""


@dataclass(frozen=True)
class Magic:
    """Placeholder resolved at export time into a GUI key or magic layer tap."""


@dataclass(frozen=True)
class PlainKey:
    """A plain key press; ``token`` is the dialect keycode without prefix."""

    token: str


@dataclass(frozen=True)
class Modified:
    """A key press wrapped in modifiers, listed in application order."""

    modifiers: tuple[str, ...]
    base: PlainKey


@dataclass(frozen=True)
class LayerAction:
    """Activate layer ``index`` using ``mode``."""

    index: int
    mode: LayerMode = LayerMode.HOLD


@dataclass(frozen=True)
class UnicodeChar:
    """Send a unicode code point given as upper-case hex digits."""

    hex: str


@dataclass(frozen=True)
class Raw:
    """Text the dialect grammar does not model; kept verbatim."""

    text: str


KeyAction: TypeAlias = (
    NoAction | Transparent | Magic | PlainKey | Modified | LayerAction | UnicodeChar | Raw
)


@dataclass(frozen=True)
class ModifierDef:
    """One side of one modifier with its wrapper name in each dialect."""

    id: str
    label: str
    short_label: str
    zmk: str
    qmk: str

    def wrapper(self, dialect: Dialect) -> str:
        return self.zmk if dialect is Dialect.ZMK else self.qmk


# Canonical order: wrapping and label composition always follow this sequence
MODIFIERS: tuple[ModifierDef, ...] = (
    ModifierDef("lctrl", "L Ctrl", "Ctrl", "LC", "LCTL"),
    ModifierDef("rctrl", "R Ctrl", "RCtrl", "RC", "RCTL"),
    ModifierDef("lshift", "L Shift", "Shift", "LS", "LSFT"),
    ModifierDef("rshift", "R Shift", "RShift", "RS", "RSFT"),
    ModifierDef("lalt", "L Alt", "Alt", "LA", "LALT"),
    ModifierDef("ralt", "R Alt", "RAlt", "RA", "RALT"),
    ModifierDef("lgui", "L Gui", "Gui", "LG", "LGUI"),
    ModifierDef("rgui", "R Gui", "RGui", "RG", "RGUI"),
)
MODIFIER_ORDER: tuple[str, ...] = tuple(modifier.id for modifier in MODIFIERS)
MODIFIERS_BY_ID: dict[str, ModifierDef] = {modifier.id: modifier for modifier in MODIFIERS}
MODIFIERS_BY_WRAPPER: dict[str, ModifierDef] = {
    **{modifier.zmk: modifier for modifier in MODIFIERS},
    **{modifier.qmk: modifier for modifier in MODIFIERS},
}


@dataclass(frozen=True)
class UnicodeOsMode:
    """Host OS unicode input method and its constant in each dialect."""

    id: str
    label: str
    zmk: str
    qmk: str


UNICODE_OS_MODES: tuple[UnicodeOsMode, ...] = (
    UnicodeOsMode("macos", "macOS", "UC_MODE_MACOS", "UNICODE_MODE_MACOS"),
    UnicodeOsMode("linux", "Linux", "UC_MODE_LINUX", "UNICODE_MODE_LINUX"),
    UnicodeOsMode(
        "wincompose",
        "Windows (WinCompose)",
        "UC_MODE_WIN_COMPOSE",
        "UNICODE_MODE_WINCOMPOSE",
    ),
    UnicodeOsMode(
        "winnumpad", "Windows (HexNumpad)", "UC_MODE_WIN_ALT", "UNICODE_MODE_WINDOWS"
    ),
)
DEFAULT_UNICODE_OS = "linux"


def get_unicode_os(value: str | None) -> UnicodeOsMode:
    """Look up a unicode OS mode, falling back to the default for unknown ids."""
    for mode in UNICODE_OS_MODES:
        if mode.id == value:
            return mode
    return next(mode for mode in UNICODE_OS_MODES if mode.id == DEFAULT_UNICODE_OS)
