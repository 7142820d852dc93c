"""Tests for layer references carried in bindings."""

from ergobox.bindings.layers import (
    layer_binding,
    parse_layer_reference,
    remap_binding,
    rewrite_layer_reference,
)
from ergobox.bindings.models import Binding, LayerAction, LayerMode


class TestLayerBinding:
    def test_modes(self):
        assert layer_binding(2) == Binding(zmk="&mo 2", qmk="MO(2)")
        assert layer_binding(1, "toggle") == Binding(zmk="&tog 1", qmk="TG(1)")
        assert layer_binding(3, LayerMode.ONCE) == Binding(zmk="&sl 3", qmk="OSL(3)")

    def test_parse_layer_reference(self):
        assert parse_layer_reference("TG(4)") == LayerAction(4, LayerMode.TOGGLE)
        assert parse_layer_reference("&kp A") is None


class TestRewriteLayerReference:
    def test_mapping_rewrites_and_keeps_mode(self):
        assert rewrite_layer_reference("&tog 2", {2: 1}) == "&tog 1"
        assert rewrite_layer_reference("OSL(2)", {2: 3}) == "OSL(3)"

    def test_indices_missing_from_mapping_are_kept(self):
        assert rewrite_layer_reference("&mo 5", {2: 1}) == "&mo 5"

    def test_none_target_clears(self):
        assert rewrite_layer_reference("MO(2)", {2: None}) == ""

    def test_unchanged_index_keeps_original_text(self):
        assert rewrite_layer_reference("&mo  1", {1: 1}) == "&mo  1"

    def test_callable_remap(self):
        assert rewrite_layer_reference("&mo 3", lambda index: index - 1) == "&mo 2"

    def test_non_layer_bindings_pass_through(self):
        assert rewrite_layer_reference("&kp A", {0: 5}) == "&kp A"
        assert rewrite_layer_reference("", {0: 5}) == ""

    def test_remap_binding_rewrites_dialects_independently(self):
        binding = Binding(zmk="&mo 2", qmk="KC_A")

        assert remap_binding(binding, {2: 1}) == Binding(zmk="&mo 1", qmk="KC_A")
