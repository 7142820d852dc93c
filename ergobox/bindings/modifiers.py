"""Modifier wrap/unwrap algebra over binding strings."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ergobox.bindings.dialects import decode, detect_dialect, get_grammar
from ergobox.bindings.models import (
    MODIFIER_ORDER,
    MODIFIERS_BY_ID,
    Binding,
    Dialect,
    Modified,
    PlainKey,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModifierSplit:
    """Result of unwrapping a binding: modifiers in application order and the bare binding."""

    modifiers: tuple[str, ...]
    base: str


def canonical_modifiers(modifier_ids: Iterable[str] | None) -> tuple[str, ...]:
    """Deduplicate modifier ids and sort them into canonical order.

    Unknown ids are dropped.
    """
    if not modifier_ids:
        return ()
    wanted = set(modifier_ids)
    return tuple(modifier_id for modifier_id in MODIFIER_ORDER if modifier_id in wanted)


def modifier_labels(modifier_ids: Iterable[str], short: bool = True) -> list[str]:
    """Display labels for modifiers in canonical order."""
    return [
        MODIFIERS_BY_ID[modifier_id].short_label
        if short
        else MODIFIERS_BY_ID[modifier_id].label
        for modifier_id in canonical_modifiers(modifier_ids)
    ]


def unwrap(binding: str | None, dialect: Dialect | str | None = None) -> ModifierSplit:
    """Split a binding into its modifiers and the plain binding they wrap.

    Examples:
        >>> unwrap("&kp LS(LC(A))")
        ModifierSplit(modifiers=('lctrl', 'lshift'), base='&kp A')
        >>> unwrap("MO(1)")
        ModifierSplit(modifiers=(), base='MO(1)')
    """
    text = (binding or "").strip()
    dialect = Dialect(dialect) if dialect is not None else detect_dialect(text)
    action = decode(text, dialect)
    if isinstance(action, Modified):
        return ModifierSplit(action.modifiers, get_grammar(dialect).encode(action.base))
    return ModifierSplit((), text)


def wrap(
    binding: str | None,
    modifier_ids: Iterable[str] | None,
    dialect: Dialect | str | None = None,
) -> str:
    """Wrap a plain key press in modifiers applied in canonical order.

    Bindings that are not key presses (transparent, no action, layer actions,
    unicode, magic, unrecognized text) are returned unchanged. Wrapping an
    already modified key press merges the modifier sets.
    """
    text = binding or ""
    ordered = canonical_modifiers(modifier_ids)
    if not ordered:
        return text

    dialect = Dialect(dialect) if dialect is not None else detect_dialect(text)
    action = decode(text, dialect)
    if isinstance(action, Modified):
        ordered = canonical_modifiers((*action.modifiers, *ordered))
        action = action.base
    if not isinstance(action, PlainKey):
        logger.debug("Not wrapping non key-press binding %r", text)
        return text
    return get_grammar(dialect).encode_key(action.token, ordered)


def wrap_binding(binding: Binding, modifier_ids: Iterable[str] | None) -> Binding:
    """Wrap both dialect strings of a binding with the same modifiers."""
    modifier_ids = canonical_modifiers(modifier_ids)
    return Binding(
        zmk=wrap(binding.zmk, modifier_ids, Dialect.ZMK),
        qmk=wrap(binding.qmk, modifier_ids, Dialect.QMK),
    )
