"""Static key registry: the assignable plain actions and their labels."""

from collections.abc import Iterable, Iterator

from pydantic import Field

from ergobox.bindings.tokens import normalize_token, token_of
from ergobox.models.base import ErgoboxBaseModel


class KeyRegistryItem(ErgoboxBaseModel):
    """One assignable action with its label and both dialect bindings."""

    label: str
    zmk: str
    qmk: str
    aliases: list[str] = Field(default_factory=list)


class KeySection(ErgoboxBaseModel):
    title: str
    items: list[KeyRegistryItem] = Field(default_factory=list)


class KeyGroup(ErgoboxBaseModel):
    title: str
    sections: list[KeySection] = Field(default_factory=list)


class KeyRegistry:
    """Read-only lookups over a list of key groups.

    Every item is indexed under the normalized token of its ZMK binding, its
    QMK binding and each alias, so ``&kp ESC``, ``KC_ESC`` and ``esc`` all
    resolve to the same item.
    """

    def __init__(self, groups: Iterable[KeyGroup]) -> None:
        self._groups: tuple[KeyGroup, ...] = tuple(groups)
        self._items: tuple[KeyRegistryItem, ...] = tuple(
            item
            for group in self._groups
            for section in group.sections
            for item in section.items
        )
        by_token: dict[str, KeyRegistryItem] = {}
        for item in self._items:
            for value in (item.zmk, item.qmk, *item.aliases):
                token = token_of(value)
                if token:
                    by_token[normalize_token(token)] = item
        self._by_token = by_token
        self._by_label = {item.label.casefold(): item for item in self._items}

    @property
    def groups(self) -> tuple[KeyGroup, ...]:
        return self._groups

    @property
    def items(self) -> tuple[KeyRegistryItem, ...]:
        return self._items

    def __iter__(self) -> Iterator[KeyRegistryItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def label_for_token(self, token: str) -> str:
        """Canonical label of a bare token, or ``""`` when unknown."""
        item = self._by_token.get(normalize_token(token)) if token else None
        return item.label if item else ""

    def find(self, name: str) -> KeyRegistryItem | None:
        """Find an item by binding, bare token, alias or label.

        Examples:
            registry.find("A"), registry.find("KC_ESC"), registry.find("&kp ESC"),
            registry.find("Vol+")
        """
        token = token_of(name)
        if token and (item := self._by_token.get(normalize_token(token))):
            return item
        return self._by_label.get(name.strip().casefold())
