"""Tests for binding labels and the key registry."""

import pytest

from ergobox.bindings.codec import format_key_label
from ergobox.bindings.models import Binding
from ergobox.bindings.modifiers import wrap


class TestFormatKeyLabel:
    @pytest.mark.parametrize(
        ("binding", "label"),
        [
            ("&kp a", "A"),
            ("&kp N4", "4"),
            ("&kp UP", "↑"),
            ("KC_RGHT", "→"),
            ("&kp LSHIFT", "Shift"),
            ("KC_PGDN", "PgDn"),
            ("&mo 2", "L2"),
            ("&none", ""),
            ("&kp C_MUTE", "C_MUTE"),
        ],
    )
    def test_labels(self, binding, label):
        assert format_key_label(binding) == label


class TestBindingCodec:
    def test_registry_label_wins(self, codec):
        assert codec.label_for("&kp N1") == "1"
        assert codec.label_for("KC_ESC") == "Esc"

    def test_layer_marker_resolves_to_layer_name(self, codec):
        names = ["Base", "Nav", "Sym"]

        assert codec.label_for("&mo 2", names) == "Sym"
        assert codec.label_for("TG(1)", names) == "Nav"
        assert codec.label_for("&mo 7", names) == "L7"

    def test_modifier_combination_label(self, codec):
        zmk = wrap(wrap("&kp A", ["lshift"]), ["lctrl"])
        qmk = wrap(wrap("KC_A", ["lshift"]), ["lctrl"])

        assert codec.key_label(Binding(zmk=zmk, qmk=qmk)) == "Ctrl+Shift+A"

    def test_qmk_modifiers_used_when_zmk_is_plain(self, codec):
        assert codec.key_label(Binding(zmk="", qmk="LALT(KC_TAB)")) == "Alt+Tab"

    def test_unicode_label(self, codec):
        assert codec.key_label(Binding(zmk="&uc 0x1F600 0", qmk="")) == "U+1F600"

    def test_falls_back_to_qmk(self, codec):
        assert codec.key_label(Binding(zmk="", qmk="KC_ESC")) == "Esc"
        assert codec.key_label(None) == ""

    def test_item_binding_wraps_registry_item(self, codec):
        item = codec.registry.find("A")

        assert codec.item_binding(item, ["lgui"]) == Binding(
            zmk="&kp LG(A)", qmk="LGUI(KC_A)"
        )

    def test_layer_palette_skips_base(self, codec):
        palette = codec.layer_palette(["Base", "Nav", "Sym"], "toggle")

        assert [(item.label, item.zmk, item.qmk) for item in palette] == [
            ("Nav", "&tog 1", "TG(1)"),
            ("Sym", "&tog 2", "TG(2)"),
        ]
        assert codec.layer_palette(["Base"]) == []


class TestKeyRegistry:
    @pytest.mark.parametrize(
        ("name", "label"),
        [
            ("A", "A"),
            ("a", "A"),
            ("KC_ESC", "Esc"),
            ("&kp ESC", "Esc"),
            ("esc", "Esc"),
            ("1", "1"),
            ("N1", "1"),
            ("Magic", "Magic"),
            ("L Shift", "L Shift"),
        ],
    )
    def test_find(self, key_registry, name, label):
        item = key_registry.find(name)

        assert item is not None
        assert item.label == label

    def test_unknown_name(self, key_registry):
        assert key_registry.find("NOT_A_KEY_AT_ALL") is None

    def test_groups(self, key_registry):
        titles = [group.title for group in key_registry.groups]

        assert titles[0] == "Core"
        assert len(key_registry) == len(list(key_registry))
